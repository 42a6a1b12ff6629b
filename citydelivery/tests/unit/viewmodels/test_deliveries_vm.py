from __future__ import annotations

import asyncio
from datetime import date
from typing import List

from citydelivery.adapters.api_errors import ApiServerError, ApiTransportError
from citydelivery.domain.models import CityDelivery, DateRange, FetchStatus
from citydelivery.usecases.fetch_deliveries import FetchDeliveries
from citydelivery.viewmodels.deliveries_vm import DeliveriesVM
from citydelivery.tests.unit.viewmodels.helpers import FakeDeliveryPort, GatedIo, inline_io, key

JAN = DateRange(date(2024, 1, 1), date(2024, 1, 31))
FEB = DateRange(date(2024, 2, 1), date(2024, 2, 29))

JAN_CITIES = [CityDelivery("Casablanca", 42), CityDelivery("Rabat", 7)]
FEB_CITIES = [CityDelivery("Marrakesh", 13)]


def _vm(port: FakeDeliveryPort, **kwargs) -> DeliveriesVM:
    return DeliveriesVM(FetchDeliveries(port), run_io=kwargs.pop("run_io", inline_io), **kwargs)


def test_initial_state_is_idle_and_empty() -> None:
    vm = _vm(FakeDeliveryPort({}))

    assert vm.status == FetchStatus.idle()
    assert vm.cities == ()
    assert vm.result_view().kind == "list"
    assert vm.result_view().rows == ()


def test_success_replaces_cities_and_reports_transitions() -> None:
    port = FakeDeliveryPort({key(JAN): JAN_CITIES})
    seen: List[str] = []
    vm = _vm(port)
    vm.on_changed = lambda: seen.append(vm.status.state)

    asyncio.run(vm.fetch_deliveries(JAN))

    assert seen == ["loading", "success"]
    assert vm.status == FetchStatus.success()
    assert vm.cities == tuple(JAN_CITIES)
    assert port.calls == [key(JAN)]


def test_incomplete_range_is_a_no_op() -> None:
    port = FakeDeliveryPort({})
    vm = _vm(port)

    asyncio.run(vm.fetch_deliveries(DateRange(date(2024, 1, 1), None)))

    assert port.calls == []
    assert vm.status == FetchStatus.idle()


def test_server_error_shows_message_and_keeps_previous_cities() -> None:
    port = FakeDeliveryPort(
        {
            key(JAN): JAN_CITIES,
            key(FEB): ApiServerError(
                "HTTP error! status: 500, message: DB down", status=500, payload="DB down"
            ),
        }
    )
    vm = _vm(port)

    asyncio.run(vm.fetch_deliveries(JAN))
    asyncio.run(vm.fetch_deliveries(FEB))

    assert vm.status.is_error
    assert "500" in vm.status.message
    assert "DB down" in vm.status.message
    assert vm.cities == tuple(JAN_CITIES)
    view = vm.result_view()
    assert view.kind == "error"
    assert view.rows == ()


def test_transport_error_surfaces_underlying_message() -> None:
    port = FakeDeliveryPort({key(JAN): ApiTransportError("Connection refused")})
    vm = _vm(port)

    asyncio.run(vm.fetch_deliveries(JAN))

    assert vm.status.message == "Error fetching deliveries. Please try again. Connection refused"


def test_new_fetch_clears_previous_error() -> None:
    port = FakeDeliveryPort(
        {key(JAN): ApiTransportError("offline"), key(FEB): FEB_CITIES}
    )
    vm = _vm(port)

    asyncio.run(vm.fetch_deliveries(JAN))
    assert vm.status.is_error
    asyncio.run(vm.fetch_deliveries(FEB))

    assert vm.status == FetchStatus.success()
    assert vm.cities == tuple(FEB_CITIES)


def test_empty_response_renders_zero_rows_without_error() -> None:
    vm = _vm(FakeDeliveryPort({key(JAN): []}))

    asyncio.run(vm.fetch_deliveries(JAN))

    view = vm.result_view()
    assert view.kind == "list"
    assert view.rows == ()
    assert view.message == ""


def test_loading_view_hides_list_while_pending() -> None:
    async def scenario() -> None:
        io = GatedIo()
        vm = _vm(FakeDeliveryPort({key(JAN): JAN_CITIES}), run_io=io)
        task = asyncio.create_task(vm.fetch_deliveries(JAN))
        await io.wait_for_calls(1)

        assert vm.status.is_loading
        assert vm.result_view().kind == "loading"

        io.gates[0].set()
        await task
        assert vm.result_view().kind == "list"

    asyncio.run(scenario())


def test_late_response_from_superseded_request_still_wins() -> None:
    """Known race: requests are not cancelled, the last one to resolve commits."""

    async def scenario() -> DeliveriesVM:
        io = GatedIo()
        vm = _vm(FakeDeliveryPort({key(JAN): JAN_CITIES, key(FEB): FEB_CITIES}), run_io=io)
        first = asyncio.create_task(vm.fetch_deliveries(JAN))
        second = asyncio.create_task(vm.fetch_deliveries(FEB))
        await io.wait_for_calls(2)

        io.gates[1].set()
        await second
        assert vm.cities == tuple(FEB_CITIES)

        io.gates[0].set()
        await first
        return vm

    vm = asyncio.run(scenario())

    assert vm.cities == tuple(JAN_CITIES)
    assert vm.status == FetchStatus.success()


def test_stale_guard_drops_superseded_response() -> None:
    async def scenario() -> DeliveriesVM:
        io = GatedIo()
        vm = _vm(
            FakeDeliveryPort({key(JAN): JAN_CITIES, key(FEB): FEB_CITIES}),
            run_io=io,
            discard_stale_responses=True,
        )
        first = asyncio.create_task(vm.fetch_deliveries(JAN))
        second = asyncio.create_task(vm.fetch_deliveries(FEB))
        await io.wait_for_calls(2)

        io.gates[1].set()
        await second
        io.gates[0].set()
        await first
        return vm

    vm = asyncio.run(scenario())

    assert vm.cities == tuple(FEB_CITIES)
    assert vm.status == FetchStatus.success()


def test_stale_guard_drops_superseded_failure() -> None:
    async def scenario() -> DeliveriesVM:
        io = GatedIo()
        vm = _vm(
            FakeDeliveryPort({key(JAN): ApiTransportError("offline"), key(FEB): FEB_CITIES}),
            run_io=io,
            discard_stale_responses=True,
        )
        first = asyncio.create_task(vm.fetch_deliveries(JAN))
        second = asyncio.create_task(vm.fetch_deliveries(FEB))
        await io.wait_for_calls(2)

        io.gates[1].set()
        await second
        io.gates[0].set()
        await first
        return vm

    vm = asyncio.run(scenario())

    assert vm.status == FetchStatus.success()


def test_runner_failure_ends_in_error_not_loading() -> None:
    async def shut_down_io(func):
        raise RuntimeError("cannot schedule new futures after shutdown")

    port = FakeDeliveryPort({key(JAN): JAN_CITIES, key(FEB): FEB_CITIES})
    vm = _vm(port)
    asyncio.run(vm.fetch_deliveries(JAN))
    vm._run_io = shut_down_io

    asyncio.run(vm.fetch_deliveries(FEB))

    assert vm.status == FetchStatus.error(
        "Error fetching deliveries. Please try again. "
        "cannot schedule new futures after shutdown"
    )
    assert vm.cities == tuple(JAN_CITIES)


def test_runner_yielding_nothing_ends_in_error() -> None:
    async def stopped_io(func):
        return None

    vm = _vm(FakeDeliveryPort({key(JAN): JAN_CITIES}), run_io=stopped_io)

    asyncio.run(vm.fetch_deliveries(JAN))

    assert vm.status.is_error
    assert vm.status.message == "Error fetching deliveries. Please try again. No response received."
    assert vm.cities == ()
