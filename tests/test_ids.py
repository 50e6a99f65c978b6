import re

from orderly.orders import SUFFIX_BOUND, generate_order_no


class TestGenerateOrderNo:
    def test_format(self):
        assert re.fullmatch(r"ORD\d+", generate_order_no())

    def test_combines_seconds_and_suffix(self):
        order_no = generate_order_no(clock=lambda: 1_700_000_000.9, rand=lambda bound: 42)
        assert order_no == "ORD170000000042"

    def test_suffix_is_drawn_below_bound(self):
        bounds = []

        def rand(bound):
            bounds.append(bound)
            return bound - 1

        order_no = generate_order_no(clock=lambda: 1, rand=rand)
        assert bounds == [SUFFIX_BOUND]
        assert order_no == "ORD199999"

    def test_numbers_differ_within_one_second(self):
        numbers = {generate_order_no(clock=lambda: 1_700_000_000) for _ in range(50)}
        assert len(numbers) > 1
