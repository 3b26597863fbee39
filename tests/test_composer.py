import numpy as np
import pytest

from cogniflow.animation.driver import AnimationDriver
from cogniflow.core.color import Color
from cogniflow.core.frame import FrameState
from cogniflow.graph.builder import graph_from_positions
from cogniflow.interaction.accumulator import accumulate
from cogniflow.interaction.state import ActivationState, RevealStage
from cogniflow.scene.composer import KEYWORD_LABELS, SceneComposer


def _setup():
    graph = graph_from_positions([(0, 0, 0), (1, 0, 0), (2, 0, 0), (30, 0, 0)], edge_threshold=1.5)
    driver = AnimationDriver(graph, rng=np.random.default_rng(0))
    return graph, driver, SceneComposer()


def _interact(graph, state, n, position=(0, 0, 0)):
    for _ in range(n):
        state = accumulate(graph, state, position)
    return state


def test_idle_frame_has_no_particles_or_labels():
    graph, driver, composer = _setup()
    frame = FrameState.start().advance(0.016)
    state = ActivationState()
    driver.update(frame, state)

    snap = composer.compose(frame, graph, state, driver)

    assert snap.stage is RevealStage.IDLE
    assert len(snap.nodes) == 4
    assert [e.edge_id for e in snap.edges] == ["0-1", "1-2"]
    assert all(e.opacity == 0.2 and not e.active for e in snap.edges)
    assert snap.particles == ()
    assert snap.labels == ()
    assert not snap.show_keywords


def test_active_edges_emit_particles():
    graph, driver, composer = _setup()
    frame = FrameState(frame_id=1, dt=0.016, t=0.95)
    state = _interact(graph, ActivationState(), 1)
    driver.update(frame, state)

    snap = composer.compose(frame, graph, state, driver)

    assert snap.edge("0-1").active
    assert snap.edge("0-1").opacity == 0.6
    assert snap.edge("1-2").opacity == 0.2
    assert len(snap.particles) == 5
    assert {p.edge_id for p in snap.particles} == {"0-1"}
    assert all(p.opacity == 0.8 for p in snap.particles)
    second = [p for p in snap.particles if p.index == 1][0]
    assert second.position[0] == pytest.approx(0.05)


def test_node_items_reflect_driver():
    graph, driver, composer = _setup()
    frame = FrameState.start().advance(0.016)
    state = _interact(graph, ActivationState(), 1)
    driver.update(frame, state)

    snap = composer.compose(frame, graph, state, driver)

    lit = snap.node(0)
    assert lit.opacity == 0.9
    assert lit.emissive_intensity == 2.0
    assert lit.rotation == pytest.approx((0.002, 0.003))
    assert lit.color == Color.from_hex("#7E3ACE").to_tuple()
    far = snap.node(3)
    assert far.emissive_intensity == 1.0
    with pytest.raises(KeyError):
        snap.node(42)


def test_labels_appear_at_five_and_brighten_when_transforming():
    graph, driver, composer = _setup()
    frame = FrameState.start().advance(0.016)

    state = _interact(graph, ActivationState(), 4)
    assert composer.compose(frame, graph, state, driver).labels == ()

    state = _interact(graph, state, 1)
    snap = composer.compose(frame, graph, state, driver)
    assert [l.text for l in snap.labels] == ["Automate", "Optimize", "Analyze", "Connect"]
    assert [l.position for l in snap.labels] == [pos for _, pos in KEYWORD_LABELS]
    assert all(l.opacity == 0.5 and l.font_size == 0.8 for l in snap.labels)

    state = _interact(graph, state, 10)
    snap = composer.compose(frame, graph, state, driver)
    assert snap.stage is RevealStage.TRANSFORMING
    assert all(l.opacity == 0.8 for l in snap.labels)


def test_snapshot_is_immutable():
    graph, driver, composer = _setup()
    frame = FrameState.start()
    snap = composer.compose(frame, graph, ActivationState(), driver, completed=True)

    assert snap.completed
    with pytest.raises(AttributeError):
        snap.completed = False


def test_custom_color():
    graph, driver, _ = _setup()
    composer = SceneComposer(color="#ff0000")
    snap = composer.compose(FrameState.start(), graph, ActivationState(), driver)
    assert snap.nodes[0].color == (1.0, 0.0, 0.0, 1.0)
