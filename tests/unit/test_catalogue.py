"""Test stock butler, hat and animal kinds."""

from patternkit.catalogue import (
    EffectJournal,
    animal,
    build_default_registry,
    hat,
    plain_butler,
)
from patternkit.chain.wrappers import decorate
from patternkit.core.enums import Placement


class TestButler:
    def test_serves_and_records(self, journal):
        butler = plain_butler(journal=journal)
        assert butler.invoke("Tacos") == "Here are your Tacos"
        assert journal.entries == ['base-serve("Tacos")']
        assert butler.kind == "butler/plain"

    def test_without_journal(self):
        assert plain_butler(greeting="Enjoy").invoke("tea") == "Enjoy tea"


class TestHats:
    def test_post_hat(self, butler, journal):
        served = decorate(butler, hat("FancyHat", journal)).invoke("soup")
        assert served == "Here are your soup, wearing a FancyHat"
        assert journal.entries == ['base-serve("soup")', "FancyHat-post"]

    def test_pre_hat(self, butler, journal):
        served = decorate(butler, hat("Beret", journal, Placement.PRE)).invoke("soup")
        assert served == "Here are your soup"
        assert journal.entries == ["Beret-pre", 'base-serve("soup")']


class TestAnimals:
    def test_known_species(self):
        assert animal("animal/lion").invoke("you") == "Lion says roar to you"

    def test_explicit_sound_and_name(self):
        cat = animal("animal/cat", sound="meow", name="Tom")
        assert cat.name == "Tom"
        assert cat.invoke("Jerry") == "Tom says meow to Jerry"


class TestJournal:
    def test_entries_are_copies(self):
        journal = EffectJournal()
        journal.record("a")
        entries = journal.entries
        entries.append("b")
        assert journal.entries == ["a"]
        assert len(journal) == 1
        journal.clear()
        assert len(journal) == 0


def test_default_registry_kinds():
    registry = build_default_registry()
    assert registry.list_kinds() == ["animal/lion", "animal/snake", "butler/plain"]
