import simpy
import random
import sys

# Configuration
from config import SimulationConfig, load_simulation_config

# Simulator components
from simulator.exceptions import InvalidParameterError
from simulator.infrastructure.message_broker import MessageBroker
from simulator.simulation import Simulator

# Analyzer
from analyzer.simulation_statistics import SimulationStatistics


def prompt_simulation_config(input_func=None) -> SimulationConfig:
    """
    Ask for the four run parameters on the console

    Args:
        input_func: Function used to read one answer (replaceable for testing)

    Raises:
        ValueError: If an answer is not a number
        InvalidParameterError: If a value is out of range
    """
    input_func = input_func if input_func is not None else input
    print("Welcome to the Elevator simulator!")
    probability = float(input_func("Please enter the probability of arrival for Requests:\n"))
    num_floors = int(input_func("Please enter the number of floors:\n"))
    num_elevators = int(input_func("Please enter the number of elevators:\n"))
    length = int(input_func("Please enter the length of the simulation (in time units):\n"))
    return SimulationConfig.create(probability, num_floors, num_elevators, length)


def run_simulation(sim_config: SimulationConfig, rng: random.Random = None):
    """
    Set up and run the entire simulation

    Args:
        sim_config: Run parameters and output settings
        rng: Random generator (seeded from sim_config.random_seed if omitted)

    Returns:
        (SimulationResult, SimulationStatistics)
    """
    if sim_config.random_seed is not None:
        print(f"Random seed fixed to {sim_config.random_seed} for reproducible results")
    else:
        print("Random seed not set - results will vary")

    print("\n--- Simulation Setup ---")
    env = simpy.Environment()
    broker = MessageBroker(env)

    # Create statistics collector
    sim_stats = SimulationStatistics(env, broker.get_broadcast_pipe())
    env.process(sim_stats.start_listening())
    sim_stats.set_simulation_metadata({
        'num_floors': sim_config.num_floors,
        'num_elevators': sim_config.num_elevators,
        'arrival_probability': sim_config.probability,
        'sim_length': sim_config.length,
        'random_seed': sim_config.random_seed,
    })

    simulator = Simulator(sim_config, rng=rng, env=env, broker=broker)

    print("\n--- Simulation Start ---")
    result = simulator.run()
    print("--- Simulation End ---\n")

    for line in result.summary_lines():
        print(line)

    sim_stats.print_request_metrics_summary()

    if sim_config.output.event_log:
        sim_stats.save_event_log(sim_config.output.event_log)
    if sim_config.output.trajectory_plot:
        sim_stats.plot_trajectory_diagram(sim_config.output.trajectory_plot)

    return result, sim_stats


def main(argv=None):
    """
    Command line entry point

    Usage:
        elvsim [simulation_config.yaml]

    Without a config file the parameters are read interactively.
    """
    argv = sys.argv[1:] if argv is None else argv
    try:
        if argv:
            print("--- Loading Configuration ---")
            sim_config = load_simulation_config(argv[0])
            print(f"Simulation Config: {argv[0]}")
        else:
            sim_config = prompt_simulation_config()
        run_simulation(sim_config)
    except (InvalidParameterError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: invalid input ({e})")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
