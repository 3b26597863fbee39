import numpy as np
import pytest

from cogniflow.core.math3d import project_points
from cogniflow.graph.builder import graph_from_positions
from cogniflow.host.picking import CameraRig, HoverTracker, pick_node

W, H = 1280.0, 720.0


def _pick(graph, x, y):
    camera = CameraRig()
    proj_scale = camera.projection(W / H)[1, 1]
    return pick_node(graph, camera.view_proj(W, H), W, H, x, y, proj_scale)


def test_origin_projects_to_screen_centre():
    camera = CameraRig()
    screen, w = project_points(np.zeros((1, 3)), camera.view_proj(W, H), W, H)
    assert screen[0] == pytest.approx([W / 2, H / 2])
    assert w[0] == pytest.approx(15.0)


def test_positive_axes_map_right_and_up():
    camera = CameraRig()
    pts = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    screen, _ = project_points(pts, camera.view_proj(W, H), W, H)
    assert screen[0, 0] > W / 2
    assert screen[1, 1] < H / 2


def test_pick_hits_node_under_pointer():
    graph = graph_from_positions([(0, 0, 0), (4, 0, 0)], sizes=[0.5, 0.5])
    assert _pick(graph, W / 2, H / 2) == 0
    assert _pick(graph, W / 2 + 10, H / 2 + 5) == 0
    assert _pick(graph, 5, 5) is None


def test_frontmost_node_wins():
    graph = graph_from_positions([(0, 0, 0), (0, 0, 5)], sizes=[0.5, 0.5])
    assert _pick(graph, W / 2, H / 2) == 1


def test_nodes_behind_camera_are_ignored():
    graph = graph_from_positions([(0, 0, 20)], sizes=[0.5])
    assert _pick(graph, W / 2, H / 2) is None


def test_empty_graph_picks_nothing():
    assert _pick(graph_from_positions([]), W / 2, H / 2) is None


def test_hover_tracker_transitions():
    tracker = HoverTracker()
    assert tracker.move(None) == []
    assert tracker.move(3) == [("enter", 3)]
    assert tracker.move(3) == []
    assert tracker.move(5) == [("leave", 3), ("enter", 5)]
    assert tracker.move(None) == [("leave", 5)]


def test_hover_tracker_forwards_to_session():
    class Recorder:
        def __init__(self):
            self.calls = []

        def pointer_enter(self, node_id):
            self.calls.append(("enter", node_id))

        def pointer_leave(self, node_id):
            self.calls.append(("leave", node_id))

    session = Recorder()
    tracker = HoverTracker()
    tracker.apply(session, 1)
    tracker.apply(session, 2)
    assert session.calls == [("enter", 1), ("leave", 1), ("enter", 2)]
