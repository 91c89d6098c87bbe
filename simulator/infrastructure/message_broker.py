import simpy

class MessageBroker:
    """
    Topic-based publish-subscribe between simulation components.

    Every published message is copied to the broadcast pipe, which Statistics
    consumes. Pipes only exist once a subscriber asks for them (get_pipe() or
    get_broadcast_pipe()), so a broker nobody listens to keeps nothing.

    Topics:
        elevator/<name>/status   floor, state and target after every change
        request/arrival          new request queued
        request/assigned         request handed to an elevator
        request/picked_up        source floor reached (carries wait_time)
        request/delivered        destination floor reached
    """
    def __init__(self, env: simpy.Environment):
        """
        Args:
            env (simpy.Environment): SimPy environment
        """
        self.env = env
        self.topics = {}  # Store per subscribed topic
        self.broadcast_pipe = None  # created by get_broadcast_pipe()

    def get_pipe(self, topic: str) -> simpy.Store:
        """
        Get or create the pipe (Store) that receives every message of a topic
        """
        if topic not in self.topics:
            self.topics[topic] = simpy.Store(self.env)
        return self.topics[topic]

    def put(self, topic: str, message):
        """
        Publish a message to the broadcast pipe and to the topic's subscribers

        Messages published before a pipe exists are not replayed to it.

        Returns:
            The put event of the topic pipe, or None when the topic has no subscriber
        """
        if self.broadcast_pipe is not None:
            self.broadcast_pipe.put({'topic': topic, 'message': message})
        if topic in self.topics:
            return self.topics[topic].put(message)
        return None

    def get_broadcast_pipe(self) -> simpy.Store:
        """Get or create the pipe carrying every message published on any topic"""
        if self.broadcast_pipe is None:
            self.broadcast_pipe = simpy.Store(self.env)
        return self.broadcast_pipe
