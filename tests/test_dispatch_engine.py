import random
from dataclasses import replace

import pytest

from fooddispatch.errors import InvalidStateError, NoCapacityError, NotFoundError
from fooddispatch.models.domain import (
    Coordinate,
    DeliverablePlace,
    OrderContext,
    OrderStatus,
    RiderSnapshot,
    RiderStatus,
)
from fooddispatch.services.delivery import DeliveryEstimator
from fooddispatch.services.dispatch import (
    Assigned,
    BoundingBoxPrefilter,
    DispatchEngine,
    InvalidState,
    NoCapacity,
    NoPrefilter,
    NotFound,
    get_prefilter,
)
from fooddispatch.services.geospatial import distance_km

RESTAURANT = (19.0850, 72.8800)
KM_PER_DEGREE = 6371.0 * 3.141592653589793 / 180


def _place(pid: str = "R1") -> DeliverablePlace:
    return DeliverablePlace(
        place_id=pid,
        name="Bombay Biryani House",
        coordinate=Coordinate(*RESTAURANT),
        is_open=True,
        delivery_radius_km=10.0,
        average_prep_minutes=20,
        rating=4.4,
    )


def _rider(rid: str, lat: float, lon: float, status: RiderStatus = RiderStatus.AVAILABLE) -> RiderSnapshot:
    return RiderSnapshot(
        rider_id=rid,
        name=f"Rider {rid}",
        coordinate=Coordinate(lat, lon),
        status=status,
        phone=f"+91-98200-{rid}",
        vehicle_number=f"MH-02-{rid}",
    )


def _rider_north(rid: str, km: float, status: RiderStatus = RiderStatus.AVAILABLE) -> RiderSnapshot:
    return _rider(rid, RESTAURANT[0] + km / KM_PER_DEGREE, RESTAURANT[1], status)


def _order(status: OrderStatus = OrderStatus.ACCEPTED, place_id: str = "R1") -> OrderContext:
    return OrderContext(
        order_id="O1",
        place_id=place_id,
        destination=Coordinate(19.0760, 72.8777),
        status=status,
    )


def _engine(**kwargs) -> DispatchEngine:
    kwargs.setdefault("prefilter", NoPrefilter())
    return DispatchEngine(estimator=DeliveryEstimator(), **kwargs)


def test_nearest_rider_is_selected_with_pickup_eta():
    riders = [_rider_north("1001", 2.0), _rider_north("1002", 0.6)]

    outcome = _engine().assign(_order(), _place(), riders)

    assert isinstance(outcome, Assigned)
    assert outcome.ok
    result = outcome.unwrap()
    assert result.rider_id == "1002"
    assert result.rider_name == "Rider 1002"
    assert result.rider_phone == "+91-98200-1002"
    assert result.vehicle_number == "MH-02-1002"
    assert result.distance_to_restaurant_km == pytest.approx(0.6)
    assert result.pickup_eta_minutes == 7
    assert result.status == OrderStatus.PREPARING
    assert "7 minutes" in result.message


def test_assignment_instruction_describes_state_changes():
    order = _order(OrderStatus.PREPARING)

    outcome = _engine().assign(order, _place(), [_rider_north("1001", 1.0)])

    instruction = outcome.instruction
    assert instruction.order_id == "O1"
    assert instruction.rider_id == "1001"
    assert instruction.expected_order_status == OrderStatus.PREPARING
    assert instruction.new_order_status == OrderStatus.PREPARING
    assert instruction.expected_rider_status == RiderStatus.AVAILABLE
    assert instruction.new_rider_status == RiderStatus.BUSY


def test_snapshots_are_not_mutated():
    order = _order()
    riders = [_rider_north("1001", 1.0)]
    before = list(riders)

    _engine().assign(order, _place(), riders)

    assert riders == before
    assert riders[0].status == RiderStatus.AVAILABLE
    assert order.status == OrderStatus.ACCEPTED
    assert order.rider_id is None


def test_equal_distance_prefers_first_rider_in_input():
    first = _rider("A", 19.0900, 72.8800)
    second = _rider("B", 19.0900, 72.8800)

    assert _engine().assign(_order(), _place(), [first, second]).unwrap().rider_id == "A"
    assert _engine().assign(_order(), _place(), [second, first]).unwrap().rider_id == "B"


def test_only_available_riders_are_considered():
    riders = [
        _rider_north("BUSY", 0.1, RiderStatus.BUSY),
        _rider_north("OFF", 0.2, RiderStatus.OFFLINE),
        _rider_north("FREE", 3.0),
    ]

    assert _engine().assign(_order(), _place(), riders).unwrap().rider_id == "FREE"


def test_no_available_riders_is_reported_as_no_capacity():
    riders = [_rider_north("BUSY", 0.1, RiderStatus.BUSY), _rider_north("OFF", 0.2, RiderStatus.OFFLINE)]

    outcome = _engine().assign(_order(), _place(), riders)

    assert isinstance(outcome, NoCapacity)
    assert not outcome.ok
    assert outcome.retryable
    with pytest.raises(NoCapacityError) as excinfo:
        outcome.unwrap()
    assert excinfo.value.retryable
    assert [rider.status for rider in riders] == [RiderStatus.BUSY, RiderStatus.OFFLINE]


def test_excluded_riders_are_skipped():
    riders = [_rider_north("1001", 0.5), _rider_north("1002", 1.5)]

    outcome = _engine().assign(_order(), _place(), riders, exclude={"1001"})

    assert outcome.unwrap().rider_id == "1002"


@pytest.mark.parametrize(
    "status",
    [OrderStatus.PLACED, OrderStatus.READY, OrderStatus.PICKED_UP, OrderStatus.DELIVERED, OrderStatus.CANCELLED],
)
def test_order_in_unassignable_state_is_rejected(status):
    outcome = _engine().assign(_order(status), _place(), [_rider_north("1001", 1.0)])

    assert isinstance(outcome, InvalidState)
    assert not outcome.retryable
    with pytest.raises(InvalidStateError):
        outcome.unwrap()


def test_missing_restaurant_is_not_found():
    outcome = _engine().assign(_order(), None, [_rider_north("1001", 1.0)])

    assert isinstance(outcome, NotFound)
    assert outcome.entity == "restaurant"
    assert outcome.entity_id == "R1"
    with pytest.raises(NotFoundError):
        outcome.unwrap()


def test_restaurant_snapshot_for_another_order_is_not_found():
    outcome = _engine().assign(_order(place_id="R2"), _place("R1"), [_rider_north("1001", 1.0)])

    assert isinstance(outcome, NotFound)


def test_selected_rider_has_minimum_distance():
    rng = random.Random(7)
    place = _place()
    for _ in range(20):
        riders = [
            _rider(
                f"{index}",
                RESTAURANT[0] + rng.uniform(-0.1, 0.1),
                RESTAURANT[1] + rng.uniform(-0.1, 0.1),
                rng.choice(list(RiderStatus)),
            )
            for index in range(60)
        ]
        available = [rider for rider in riders if rider.status == RiderStatus.AVAILABLE]
        expected = min(available, key=lambda rider: distance_km(rider.coordinate, place.coordinate))

        assert _engine().assign(_order(), place, riders).unwrap().rider_id == expected.rider_id


def test_rank_riders_orders_nearest_first():
    riders = [
        _rider_north("C", 3.0),
        _rider_north("A", 1.0),
        _rider_north("X", 0.5, RiderStatus.BUSY),
        _rider_north("B", 2.0),
    ]

    ranked = _engine().rank_riders(_place(), riders)

    assert [item.rider.rider_id for item in ranked] == ["A", "B", "C"]
    assert ranked[0].distance_km == pytest.approx(1.0)


def test_bounding_box_prefilter_gives_same_choice():
    rng = random.Random(11)
    place = _place()
    plain = _engine()
    boxed = _engine(prefilter=BoundingBoxPrefilter(radius_km=2.0))
    for _ in range(20):
        riders = [
            _rider(f"{index}", RESTAURANT[0] + rng.uniform(-0.2, 0.2), RESTAURANT[1] + rng.uniform(-0.2, 0.2))
            for index in range(40)
        ]

        assert boxed.assign(_order(), place, riders).unwrap() == plain.assign(_order(), place, riders).unwrap()


def test_bounding_box_prefilter_falls_back_when_everyone_is_outside():
    riders = [_rider_north("FAR", 8.0), _rider_north("FARTHER", 9.0)]

    outcome = _engine(prefilter=BoundingBoxPrefilter(radius_km=1.0)).assign(_order(), _place(), riders)

    assert outcome.unwrap().rider_id == "FAR"


@pytest.mark.parametrize(
    "restaurant, same_side, across",
    [
        ((0.0, 179.99), (0.0, 179.97), (0.0, -179.995)),
        ((0.0, -179.99), (0.0, -179.97), (0.0, 179.995)),
        ((89.99, 0.0), (89.965, 0.0), (89.99, 180.0)),
    ],
)
def test_bounding_box_prefilter_keeps_riders_across_the_antimeridian_and_poles(restaurant, same_side, across):
    place = replace(_place(), coordinate=Coordinate(*restaurant))
    riders = [_rider("SAME_SIDE", *same_side), _rider("ACROSS", *across)]
    plain = _engine()
    boxed = _engine(prefilter=BoundingBoxPrefilter(radius_km=5.0))

    expected = plain.assign(_order(), place, riders).unwrap()

    assert expected.rider_id == "ACROSS"
    assert boxed.assign(_order(), place, riders).unwrap() == expected


def test_order_already_holding_a_rider_is_rejected():
    order = replace(_order(OrderStatus.PREPARING), rider_id="OLD")

    outcome = _engine().assign(order, _place(), [_rider_north("NEW", 1.0)])

    assert isinstance(outcome, InvalidState)
    assert outcome.status == OrderStatus.PREPARING


def test_prefilter_factory():
    assert isinstance(get_prefilter("none"), NoPrefilter)
    prefilter = get_prefilter("bounding_box", radius_km=3.0)
    assert isinstance(prefilter, BoundingBoxPrefilter)
    assert prefilter.covered_radius_km < 3.0

    with pytest.raises(ValueError):
        get_prefilter("grid")
    with pytest.raises(ValueError):
        BoundingBoxPrefilter(radius_km=0)
