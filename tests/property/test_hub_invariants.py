"""Property test: NotificationHub ordering, dedupe and snapshot invariants.

Uses hypothesis to generate random sequences of subscribe / unsubscribe /
deliver operations and checks them against a plain list model.
"""

from hypothesis import given, settings, strategies as st

from patternkit.core.enums import FailurePolicy
from patternkit.notify.hub import NotificationHub


class Watcher:
    def __init__(self, name):
        self.name = name
        self.received = []

    def on_change(self, state):
        self.received.append(state)


operations = st.lists(
    st.tuples(
        st.sampled_from(["subscribe", "unsubscribe", "deliver"]),
        st.integers(min_value=0, max_value=5),
    ),
    max_size=60,
)


@settings(max_examples=200)
@given(operations)
def test_hub_matches_ordered_set_model(ops):
    watchers = [Watcher(f"p{i}") for i in range(6)]
    hub = NotificationHub("model", failure_policy=FailurePolicy.COLLECT)
    model: list[Watcher] = []
    expected = {p.name: [] for p in watchers}

    for step, (op, index) in enumerate(ops):
        watcher = watchers[index]
        if op == "subscribe":
            hub.subscribe(watcher)
            if watcher not in model:
                model.append(watcher)
        elif op == "unsubscribe":
            hub.unsubscribe(watcher)
            if watcher in model:
                model.remove(watcher)
        else:
            report = hub.deliver(step)
            assert report.delivered == [p.name for p in model]
            for p in model:
                expected[p.name].append(step)

        assert hub.listeners == model
        assert len(set(map(id, hub.listeners))) == len(hub.listeners)

    for p in watchers:
        assert p.received == expected[p.name]


@given(
    st.integers(min_value=0, max_value=6),
    st.integers(min_value=1, max_value=6),
)
def test_listeners_added_mid_pass_are_excluded(initial, added):
    hub = NotificationHub("snap", failure_policy=FailurePolicy.COLLECT)
    late = [Watcher(f"late{i}") for i in range(added)]
    early = [Watcher(f"early{i}") for i in range(initial)]

    def spawner(state):
        for watcher in late:
            hub.subscribe(watcher)

    hub.subscribe(spawner)
    for watcher in early:
        hub.subscribe(watcher)

    hub.deliver("first")
    assert all(p.received == [] for p in late)
    assert all(p.received == ["first"] for p in early)

    hub.deliver("second")
    assert all(p.received == ["second"] for p in late)


@given(st.lists(st.booleans(), min_size=1, max_size=12))
def test_failures_never_block_healthy_listeners(fails):
    hub = NotificationHub("iso", failure_policy=FailurePolicy.COLLECT)
    healthy = []

    for i, should_fail in enumerate(fails):
        if should_fail:
            def bad(state, i=i):
                raise RuntimeError(i)

            bad.name = f"bad{i}"
            hub.subscribe(bad)
        else:
            watcher = Watcher(f"ok{i}")
            healthy.append(watcher)
            hub.subscribe(watcher)

    report = hub.deliver("x")

    assert all(p.received == ["x"] for p in healthy)
    assert report.failed_listeners == [f"bad{i}" for i, f in enumerate(fails) if f]
    assert report.delivered == [p.name for p in healthy]
