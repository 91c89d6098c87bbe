import simpy
import matplotlib.pyplot as plt
import re
import json
from datetime import datetime

class Statistics:
    """
    Receives all communications and
    analyzes and records necessary information as an independent "recorder".
    Collects all events in JSON Lines format for offline playback.
    """
    STATUS_TOPIC = re.compile(r'elevator/(.*?)/status')

    def __init__(self, env: simpy.Environment, broadcast_pipe: simpy.Store):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.elevator_trajectories = {}  # {elevator_name: [(timestamp, floor), ...]}
        self.arrival_history = []  # [(timestamp, source_floor, destination_floor)]
        self.pickup_history = {}  # Pick-up events by elevator: [(timestamp, floor)]
        self.delivery_history = {}  # Delivery events by elevator: [(timestamp, floor)]

        # Track current elevator states
        self.current_elevator_states = {}  # {elevator_name: {floor, state, target_floor, request_id}}

        # JSON Lines event log for offline playback
        self.event_log = []  # List of events in standardized format
        self.simulation_metadata = {}  # Metadata about the simulation

    def _add_event_log(self, event_type, event_data):
        """
        Add an event to the JSON Lines log.

        Args:
            event_type (str): Type of event (e.g., 'elevator_status', 'request_arrival', etc.)
            event_data (dict): Event-specific data
        """
        event = {
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        }
        self.event_log.append(event)

    def set_simulation_metadata(self, metadata):
        """
        Set simulation metadata (called before simulation starts).

        Args:
            metadata (dict): Simulation configuration (num_floors, elevators, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        """
        Main process to start intercepting global broadcasts.
        """
        while True:
            data = yield self.broadcast_pipe.get()

            topic = data.get('topic', '')
            message = data.get('message', {})
            self.handle_message(topic, message)

    def handle_message(self, topic, message):
        """Record one broadcast message"""
        status_match = self.STATUS_TOPIC.search(topic)
        if status_match:
            self._record_status(status_match.group(1), message)
            return

        if topic == 'request/arrival':
            self.arrival_history.append(
                (message.get('timestamp'), message.get('source_floor'), message.get('destination_floor'))
            )
            self._add_event_log('request_arrival', {
                'request': message.get('request_id'),
                'source_floor': message.get('source_floor'),
                'destination_floor': message.get('destination_floor'),
                'queue_length': message.get('queue_length')
            })

        elif topic == 'request/assigned':
            self._add_event_log('request_assigned', {
                'request': message.get('request_id'),
                'elevator': message.get('elevator_name'),
                'floor': message.get('current_floor')
            })

        elif topic == 'request/picked_up':
            elevator_name = message.get('elevator_name')
            self.pickup_history.setdefault(elevator_name, []).append(
                (message.get('timestamp'), message.get('floor'))
            )
            self._add_event_log('request_picked_up', {
                'request': message.get('request_id'),
                'elevator': elevator_name,
                'floor': message.get('floor'),
                'wait_time': message.get('wait_time')
            })

        elif topic == 'request/delivered':
            elevator_name = message.get('elevator_name')
            self.delivery_history.setdefault(elevator_name, []).append(
                (message.get('timestamp'), message.get('floor'))
            )
            self._add_event_log('request_delivered', {
                'request': message.get('request_id'),
                'elevator': elevator_name,
                'floor': message.get('floor')
            })

    def _record_status(self, elevator_name, message):
        trajectory = self.elevator_trajectories.setdefault(elevator_name, [])
        timestamp = message.get('timestamp')
        floor = message.get('current_floor')

        # Record if not exactly the same as the last data point
        if not trajectory or trajectory[-1] != (timestamp, floor):
            trajectory.append((timestamp, floor))

        self.current_elevator_states[elevator_name] = {
            'floor': floor,
            'state': message.get('state'),
            'target_floor': message.get('target_floor'),
            'request_id': message.get('request_id')
        }

        self._add_event_log('elevator_status', {
            'elevator': elevator_name,
            'floor': floor,
            'state': message.get('state'),
            'target_floor': message.get('target_floor'),
            'request': message.get('request_id')
        })

    def plot_trajectory_diagram(self, output_filename='elevator_trajectory_diagram.png', show=False):
        """Draw trajectory diagram after simulation ends

        Args:
            output_filename: PNG file to write
            show: If True, also open an interactive window
        """
        print("\n--- Plotting: Elevator Trajectory Diagram ---")
        fig = plt.figure(figsize=(14, 8))

        # Define colors for different elevators
        elevator_colors = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b']
        elevator_names = sorted(self.elevator_trajectories.keys())

        for idx, name in enumerate(elevator_names):
            trajectory = self.elevator_trajectories[name]
            if not trajectory:
                continue

            sorted_trajectory = sorted(trajectory, key=lambda x: x[0])
            times, floors = zip(*sorted_trajectory)

            color = elevator_colors[idx % len(elevator_colors)]
            plt.step(times, floors, where='post', label=name, linewidth=2.5, color=color, alpha=0.8)

            self._plot_service_events(name, color)

        self._plot_arrivals()

        plt.title("Elevator Trajectory Diagram")
        plt.xlabel("Time (steps)")
        plt.ylabel("Floor")
        plt.grid(True, which='both', linestyle='--', alpha=0.7)

        all_floors = [floor for trajectory in self.elevator_trajectories.values() for _, floor in trajectory]
        if all_floors:
            min_floor = int(min(all_floors))
            max_floor = int(max(all_floors))
            plt.yticks(range(min_floor, max_floor + 2))

        if elevator_names:
            plt.legend(loc='upper right', fontsize=10)

        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved to: {output_filename}")

        if show:
            plt.show()
        plt.close(fig)
        return output_filename

    def _plot_service_events(self, elevator_name, color):
        """Mark pick-ups (triangles) and deliveries (circles) on an elevator's line"""
        pickups = self.pickup_history.get(elevator_name, [])
        if pickups:
            times, floors = zip(*pickups)
            plt.scatter(times, floors, marker='^', s=60, color=color, edgecolors='black', zorder=3)

        deliveries = self.delivery_history.get(elevator_name, [])
        if deliveries:
            times, floors = zip(*deliveries)
            plt.scatter(times, floors, marker='o', s=60, facecolors='none', edgecolors=color, zorder=3)

    def _plot_arrivals(self):
        """Mark request arrivals at their source floor"""
        if not self.arrival_history:
            return
        times = [t for t, _, _ in self.arrival_history]
        floors = [source for _, source, _ in self.arrival_history]
        plt.scatter(times, floors, marker='x', s=40, color='gray', alpha=0.6, label='arrival')

    def save_event_log(self, filename='simulation_log.jsonl'):
        """
        Save the event log to a JSON Lines file.

        Args:
            filename (str): Name of the output file (default: 'simulation_log.jsonl')
        """
        print(f"\nSaving event log to {filename}...")

        with open(filename, 'w', encoding='utf-8') as f:
            # Write metadata as first line
            if self.simulation_metadata:
                f.write(json.dumps({
                    "type": "metadata",
                    "data": self.simulation_metadata
                }) + '\n')

            # Events are already in time order due to sequential processing
            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + '\n')

        print(f"Event log saved: {len(self.event_log)} events written to {filename}")
        return filename
