"""Test StrategySelector swapping and use as a chain base."""

import pytest

from patternkit.chain.selector import StrategySelector
from patternkit.chain.wrappers import BehaviorChain, Decoration
from patternkit.core.behavior import Behavior
from patternkit.core.errors import InvalidComposition, UnknownKind
from patternkit.core.interfaces import IBehavior


@pytest.fixture
def selector():
    return StrategySelector(
        "greeter",
        {
            "formal": Behavior("Formal", lambda who: f"Good evening, {who}"),
            "casual": Behavior("Casual", lambda who: f"Hey {who}"),
        },
        default="formal",
    )


class TestStrategySelector:
    def test_default_selected(self, selector):
        assert selector.current_key == "formal"
        assert selector.invoke("Ada") == "Good evening, Ada"

    def test_swap(self, selector):
        selector.select("casual")
        assert selector.invoke("Ada") == "Hey Ada"
        assert selector.current.name == "Casual"

    def test_unknown_key(self, selector):
        with pytest.raises(UnknownKind) as info:
            selector.select("pirate")
        assert info.value.available == ["casual", "formal"]
        assert selector.current_key == "formal"

    def test_nothing_selected(self):
        empty = StrategySelector("empty")
        assert empty.current is None
        with pytest.raises(InvalidComposition, match="no strategy"):
            empty.invoke("x")

    def test_register_rejects_non_behavior(self, selector):
        with pytest.raises(InvalidComposition):
            selector.register("bad", object())

    def test_keys_in_registration_order(self, selector):
        assert selector.keys() == ["formal", "casual"]

    def test_is_behavior(self, selector):
        assert isinstance(selector, IBehavior)

    def test_swap_under_existing_chain(self, selector):
        chain = BehaviorChain(selector).wrap(Decoration("Bang", lambda v, r: r + "!"))
        assert chain.invoke("Ada") == "Good evening, Ada!"
        selector.select("casual")
        assert chain.invoke("Ada") == "Hey Ada!"
        assert chain.describe() == ["Bang", "greeter"]
