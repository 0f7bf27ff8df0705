"""Tests for the in-memory order store."""

import asyncio


class TestOrderCopies:
    def test_unsaved_changes_are_not_visible(self, orders, order):
        order.email = "changed@example.com"

        assert orders.get_order(order.id).email == "john.doe@example.com"

    def test_lookups_by_token_and_number(self, orders, order):
        assert orders.find_by_token(order.token).id == order.id
        assert orders.find_by_number(order.number).id == order.id
        assert orders.find_by_token(None) is None


class TestOrderLocks:
    def test_same_lock_while_in_use(self, orders, order):
        lock = orders.lock(order.id)

        assert orders.lock(order.id) is lock
        assert orders.lock("other-order") is not lock

    def test_unused_locks_are_released(self, orders, order):
        lock = orders.lock(order.id)
        assert order.id in orders._locks

        del lock

        assert order.id not in orders._locks

    def test_waiters_share_the_lock(self, orders, order):
        events = []

        async def work(name):
            async with orders.lock(order.id):
                events.append(f"{name} start")
                await asyncio.sleep(0.01)
                events.append(f"{name} end")

        async def run():
            await asyncio.gather(work("a"), work("b"))

        asyncio.run(run())

        assert events == ["a start", "a end", "b start", "b end"]
        assert order.id not in orders._locks
