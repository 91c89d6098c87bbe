import numpy as np

from .statistics import Statistics

class SimulationStatistics(Statistics):
    """
    Simulator-only statistics with "God's view" access.

    Features:
    - Follows every request from arrival through pick-up to delivery
    - Per-request wait, ride and journey times
    - Distribution summaries (mean, min, max, percentiles)

    Use cases:
    - Dispatch policy evaluation
    - Batch experiments
    - Debugging
    """
    def __init__(self, env, broadcast_pipe):
        super().__init__(env, broadcast_pipe)

        # {request_id: {'arrival', 'source_floor', 'destination_floor', 'elevator', 'assigned', 'picked_up', 'delivered'}}
        self.requests = {}

    def handle_message(self, topic, message):
        super().handle_message(topic, message)

        request_id = message.get('request_id')
        if request_id is None or not topic.startswith('request/'):
            return

        record = self.requests.setdefault(request_id, {
            'arrival': None,
            'source_floor': None,
            'destination_floor': None,
            'elevator': None,
            'assigned': None,
            'picked_up': None,
            'delivered': None,
        })
        timestamp = message.get('timestamp')

        if topic == 'request/arrival':
            record['arrival'] = timestamp
            record['source_floor'] = message.get('source_floor')
            record['destination_floor'] = message.get('destination_floor')
        elif topic == 'request/assigned':
            record['assigned'] = timestamp
            record['elevator'] = message.get('elevator_name')
        elif topic == 'request/picked_up':
            record['picked_up'] = timestamp
        elif topic == 'request/delivered':
            record['delivered'] = timestamp

    # ========================================
    # Per-request metrics
    # ========================================

    def get_wait_times(self):
        """Arrival to pick-up, for every request that was picked up"""
        return [r['picked_up'] - r['arrival'] for r in self.requests.values()
                if r['arrival'] is not None and r['picked_up'] is not None]

    def get_riding_times(self):
        """Pick-up to delivery, for every delivered request"""
        return [r['delivered'] - r['picked_up'] for r in self.requests.values()
                if r['picked_up'] is not None and r['delivered'] is not None]

    def get_total_journey_times(self):
        """Arrival to delivery, for every delivered request"""
        return [r['delivered'] - r['arrival'] for r in self.requests.values()
                if r['arrival'] is not None and r['delivered'] is not None]

    def get_unserved_request_ids(self):
        """Requests that arrived but were never picked up"""
        return sorted(request_id for request_id, r in self.requests.items() if r['picked_up'] is None)

    @staticmethod
    def summarize(values):
        """
        Distribution summary of a list of durations.

        Returns:
            dict with count, mean, min, max, p50 and p90 (all zero for an empty list)
        """
        if not values:
            return {'count': 0, 'mean': 0.0, 'min': 0.0, 'max': 0.0, 'p50': 0.0, 'p90': 0.0}

        data = np.asarray(values, dtype=float)
        return {
            'count': int(data.size),
            'mean': float(data.mean()),
            'min': float(data.min()),
            'max': float(data.max()),
            'p50': float(np.percentile(data, 50)),
            'p90': float(np.percentile(data, 90)),
        }

    def print_request_metrics_summary(self):
        """
        Print detailed per-request metrics.

        Metrics include:
        - Waiting time (arrival to pick-up)
        - Riding time (pick-up to delivery)
        - Total journey time (arrival to delivery)
        """
        print("\n" + "="*80)
        print("   REQUEST METRICS SUMMARY (SIMULATION ONLY)")
        print("="*80)

        sections = [
            ("Waiting Time (Arrival to Pick-up)", self.get_wait_times()),
            ("Riding Time", self.get_riding_times()),
            ("Total Journey Time", self.get_total_journey_times()),
        ]
        for title, values in sections:
            if not values:
                continue
            summary = self.summarize(values)
            print(f"\n{title}:")
            print(f"  Count:   {summary['count']:>6} requests")
            print(f"  Average: {summary['mean']:>6.2f} steps")
            print(f"  Min:     {summary['min']:>6.2f} steps")
            print(f"  Max:     {summary['max']:>6.2f} steps")
            print(f"  P50:     {summary['p50']:>6.2f} steps")
            print(f"  P90:     {summary['p90']:>6.2f} steps")

        unserved = self.get_unserved_request_ids()
        if unserved:
            print(f"\nNever picked up: {len(unserved)} requests")

        print("="*80)
