"""
Elevator State Machine Tests

IDLE -> TO_SOURCE -> TO_DESTINATION -> IDLE, one floor per step,
and contract violations raising InvalidParameterError.
"""

import random

import pytest

from simulator.core.elevator import Elevator, Idle, MovingToDestination, MovingToSource
from simulator.core.request import Request
from simulator.exceptions import InvalidParameterError
from simulator.infrastructure.message_broker import MessageBroker


def make_request(scripted_random, source, destination, arrival=0, num_floors=10):
    request = Request(num_floors, scripted_random(floors=[source, destination]), request_id=1)
    request.stamp_arrival(arrival)
    return request


def test_new_elevator_is_idle_on_first_floor(env):
    elevator = Elevator(env, "Elevator_1")
    assert elevator.current_floor == 1
    assert elevator.is_idle
    assert elevator.state == Idle()
    assert elevator.request is None
    assert elevator.target_floor is None


def test_negative_floor_is_rejected(env):
    elevator = Elevator(env, "Elevator_1")
    with pytest.raises(InvalidParameterError):
        elevator.set_current_floor(-1)
    assert elevator.current_floor == 1

    elevator.set_current_floor(0)
    assert elevator.current_floor == 0


@pytest.mark.parametrize("bad_state", ["TO_SOURCE", 3, None, Idle])
def test_unknown_state_is_rejected(env, bad_state):
    elevator = Elevator(env, "Elevator_1")
    with pytest.raises(InvalidParameterError):
        elevator.set_state(bad_state)
    assert elevator.is_idle


def test_moving_states_require_a_request():
    with pytest.raises(InvalidParameterError):
        MovingToSource(None)
    with pytest.raises(InvalidParameterError):
        MovingToDestination("Request_1")


def test_assign_starts_trip_to_source(env, scripted_random):
    elevator = Elevator(env, "Elevator_1")
    request = make_request(scripted_random, 3, 7)

    elevator.assign(request)

    assert elevator.state == MovingToSource(request)
    assert elevator.request is request
    assert elevator.target_floor == 3


def test_busy_elevator_refuses_second_request(env, scripted_random):
    elevator = Elevator(env, "Elevator_1")
    elevator.assign(make_request(scripted_random, 3, 7))
    with pytest.raises(InvalidParameterError):
        elevator.assign(make_request(scripted_random, 2, 5))


def test_full_trip_timeline(env, scripted_random):
    elevator = Elevator(env, "Elevator_1")
    request = make_request(scripted_random, 3, 7, arrival=1)
    elevator.assign(request)

    assert elevator.advance(1) is None
    assert elevator.current_floor == 2

    # Source reached: wait time reported, now carrying the request
    assert elevator.advance(2) == 1
    assert elevator.current_floor == 3
    assert isinstance(elevator.state, MovingToDestination)
    assert elevator.request is request

    for now, floor in [(3, 4), (4, 5), (5, 6)]:
        assert elevator.advance(now) is None
        assert elevator.current_floor == floor
        assert not elevator.is_idle

    assert elevator.advance(6) is None
    assert elevator.current_floor == 7
    assert elevator.is_idle
    assert elevator.request is None


def test_moves_down_toward_lower_target(env, scripted_random):
    elevator = Elevator(env, "Elevator_1", initial_floor=6)
    elevator.assign(make_request(scripted_random, 4, 1, arrival=0))

    elevator.advance(1)
    assert elevator.current_floor == 5
    assert elevator.advance(2) == 2
    assert elevator.current_floor == 4


def test_pickup_on_current_floor_consumes_no_movement(env, scripted_random):
    elevator = Elevator(env, "Elevator_1")
    elevator.assign(make_request(scripted_random, 1, 2, arrival=4))

    assert elevator.advance(4) == 0
    assert elevator.current_floor == 1
    assert isinstance(elevator.state, MovingToDestination)


def test_self_trip_completes_without_moving(env, scripted_random):
    elevator = Elevator(env, "Elevator_1")
    elevator.assign(make_request(scripted_random, 1, 1, arrival=2))

    assert elevator.advance(2) == 0
    assert isinstance(elevator.state, MovingToDestination)

    assert elevator.advance(3) is None
    assert elevator.is_idle
    assert elevator.current_floor == 1


def test_idle_elevator_does_not_move(env):
    elevator = Elevator(env, "Elevator_1", initial_floor=4)
    for now in range(1, 5):
        assert elevator.advance(now) is None
    assert elevator.current_floor == 4


def test_movement_never_increases_distance(env):
    rng = random.Random(5)
    elevator = Elevator(env, "Elevator_1")

    for trip in range(50):
        request = Request(12, rng, request_id=trip)
        request.stamp_arrival(0)
        elevator.assign(request)
        now = 0
        while not elevator.is_idle:
            before = elevator.current_floor
            target = elevator.target_floor
            elevator.advance(now)
            after = elevator.current_floor
            assert abs(after - before) <= 1
            assert abs(target - after) <= abs(target - before)
            assert (elevator.request is None) == elevator.is_idle
            now += 1


def test_status_and_service_events_are_published(env, scripted_random):
    broker = MessageBroker(env)
    status_pipe = broker.get_pipe("elevator/Elevator_1/status")
    pickup_pipe = broker.get_pipe("request/picked_up")
    delivered_pipe = broker.get_pipe("request/delivered")
    broadcast_pipe = broker.get_broadcast_pipe()

    elevator = Elevator(env, "Elevator_1", broker)
    elevator.assign(make_request(scripted_random, 2, 1, arrival=0))
    elevator.advance(1)
    elevator.advance(2)

    states = [message["state"] for message in status_pipe.items]
    assert states[0] == "IDLE"
    assert "TO_SOURCE" in states
    assert states[-1] == "IDLE"

    assert [m["wait_time"] for m in pickup_pipe.items] == [1]
    assert [m["floor"] for m in delivered_pipe.items] == [1]
    assert len(broadcast_pipe.items) > len(status_pipe.items)


def test_broker_without_listener_keeps_nothing(env, scripted_random):
    broker = MessageBroker(env)

    elevator = Elevator(env, "Elevator_1", broker)
    elevator.assign(make_request(scripted_random, 2, 1, arrival=0))
    elevator.advance(1)
    elevator.advance(2)

    assert broker.broadcast_pipe is None
    assert broker.topics == {}
    assert broker.get_broadcast_pipe().items == []
