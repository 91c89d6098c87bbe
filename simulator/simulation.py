"""
Simulation driver

Advances a discrete clock one step at a time and, per step, runs arrival,
dispatch and movement in that fixed order. The clock is a SimPy process
that yields one unit timeout per step, so all elevators move in lock-step.
"""

import random
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

import simpy

from config.simulation import SimulationConfig
from controller.dispatcher import Dispatcher
from .core.arrival_source import ArrivalSource
from .core.elevator import Elevator, MovingToDestination
from .core.request import Request
from .core.request_queue import RequestQueue
from .infrastructure.message_broker import MessageBroker


@dataclass
class SimulationResult:
    """Aggregate metrics of one finished run"""
    total_wait_time: int = 0
    total_requests_served: int = 0  # requests whose source floor was reached
    total_arrivals: int = 0
    requests_delivered: int = 0
    requests_pending: int = 0  # still queued when the run ended
    length: int = 0

    @property
    def average_wait_time(self) -> float:
        if self.total_requests_served == 0:
            return 0.0
        return self.total_wait_time / self.total_requests_served

    def format_average_wait_time(self) -> str:
        """Average wait to two decimals, halves rounded up (1/8 -> "0.13")"""
        if self.total_requests_served == 0:
            return "0.00"
        average = Decimal(self.total_wait_time) / Decimal(self.total_requests_served)
        return str(average.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    def summary_lines(self) -> List[str]:
        return [
            "Elevator Results:",
            f"Total Wait Time: {self.total_wait_time}",
            f"Total Requests: {self.total_requests_served}",
            f"Average Wait Time: {self.format_average_wait_time()}",
        ]


class Simulator:
    """
    Owns every piece of run state: arrival source, request queue, elevators
    and dispatcher. Nothing is shared between instances, so independent runs
    can be created side by side.
    """

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None,
                 env: Optional[simpy.Environment] = None, broker: Optional[MessageBroker] = None,
                 dispatcher: Optional[Dispatcher] = None):
        """
        Args:
            config: Run parameters
            rng: Random generator for arrivals and request floors.
                 Defaults to random.Random(config.random_seed).
            env: SimPy environment used as the clock (a fresh one if omitted)
            broker: Message broker for trace events (no events are published if omitted).
                    Its broadcast pipe is only created and filled once a listener
                    calls get_broadcast_pipe().
            dispatcher: Dispatch policy (first idle elevator if omitted)
        """
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.random_seed)
        self.env = env if env is not None else simpy.Environment()
        self.broker = broker
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()

        self.arrival_source = ArrivalSource(config.probability, self.rng)
        self.queue = RequestQueue()
        self.elevators = [
            Elevator(self.env, f"Elevator_{i}", self.broker)
            for i in range(1, config.num_elevators + 1)
        ]

        self.total_wait_time = 0
        self.total_requests_served = 0
        self.total_arrivals = 0
        self.requests_delivered = 0
        self.trace: List[str] = []
        self._has_run = False

    # --- Clock ---

    def run(self) -> SimulationResult:
        """Run every step from 1 to length inclusive and return the aggregates"""
        if self._has_run:
            raise RuntimeError("Simulator already ran; create a new Simulator for another run")
        self._has_run = True

        start = self.env.now
        length = self.config.length
        print(f"{self.env.now:.2f} [Simulator] Starting run: probability={self.config.probability}, "
              f"floors={self.config.num_floors}, elevators={self.config.num_elevators}, length={length}, "
              f"dispatch={self.dispatcher.get_strategy_name()}")

        self.env.process(self._clock())
        # One extra unit so listeners consume everything published during the last step
        self.env.run(until=start + length + 1)

        print(f"{self.env.now:.2f} [Simulator] Run finished after {length} steps")
        return self.result()

    def _clock(self):
        for time in range(1, self.config.length + 1):
            yield self.env.timeout(1)
            self.step(time)

    # --- One step ---

    def step(self, time: int):
        """Arrival, dispatch and movement for one time step, in that order"""
        self._handle_arrival(time)
        self.dispatcher.dispatch(self.queue, self.elevators, now=self.env.now)

        for elevator in self.elevators:
            carrying = isinstance(elevator.state, MovingToDestination)
            wait_time = elevator.advance(time)
            if wait_time is not None:
                self.total_wait_time += wait_time
                self.total_requests_served += 1
            elif carrying and elevator.is_idle:
                self.requests_delivered += 1

    def _handle_arrival(self, time: int):
        if not self.arrival_source.request_arrived():
            return

        self.total_arrivals += 1
        request = Request(self.config.num_floors, self.rng, request_id=self.total_arrivals)
        request.stamp_arrival(time)
        self.queue.enqueue(request)

        line = f"Source: {request.source_floor} Destination: {request.destination_floor}"
        self.trace.append(line)
        print(line)

        if self.broker is not None:
            self.broker.put("request/arrival", {
                "timestamp": self.env.now,
                "request_id": request.request_id,
                "source_floor": request.source_floor,
                "destination_floor": request.destination_floor,
                "queue_length": len(self.queue),
            })

    # --- Results ---

    def result(self) -> SimulationResult:
        return SimulationResult(
            total_wait_time=self.total_wait_time,
            total_requests_served=self.total_requests_served,
            total_arrivals=self.total_arrivals,
            requests_delivered=self.requests_delivered,
            requests_pending=len(self.queue),
            length=self.config.length,
        )


def simulate(config: SimulationConfig, rng: Optional[random.Random] = None) -> SimulationResult:
    """Run one independent simulation and return its aggregates"""
    return Simulator(config, rng=rng).run()


def run_batch(config: SimulationConfig, seeds: Iterable[int]) -> List[SimulationResult]:
    """
    Run one independent simulation per seed with identical parameters.

    Each run gets a fresh environment, queue, elevators and random generator.
    """
    return [simulate(config, rng=random.Random(seed)) for seed in seeds]
