"""
Cogniflow Network - moderngl-window Host

Reference host for a NetworkSession:
- nodes and particles drawn as sized, alpha-blended points
- edges drawn as lines with per-edge opacity
- keyword anchors drawn as points, keyword text shown in the window title
- mouse hover converted to pointer_enter / pointer_leave via screen picking
- S skips the animation once the session offers it

Run with: python app_mglw.py [--seed N] [--nodes N] [--config FILE] [--debug-signals]
"""

from __future__ import annotations
import logging
from typing import List

import numpy as np
import moderngl
import moderngl_window as mglw

from cogniflow.core.color import Color
from cogniflow.core.config import SessionConfig, load_config
from cogniflow.core.signal import (
    SignalDebugger, on_signal,
    SIGNAL_COMPLETE, SIGNAL_KEYWORDS_REVEALED, SIGNAL_SKIP_AVAILABLE,
)
from cogniflow.host.picking import CameraRig, HoverTracker, pick_node
from cogniflow.scene.session import NetworkSession
from cogniflow.scene.snapshot import FrameSnapshot

logger = logging.getLogger(__name__)

TITLE = "Cogniflow"
POINT_STRIDE = 8    # 3f pos, 4f color, 1f size
LINE_STRIDE = 7     # 3f pos, 4f color
PARTICLE_SIZE = 0.05
LABEL_ANCHOR_SIZE = 0.12


POINT_VS = """
#version 330

in vec3 in_pos;
in vec4 in_color;
in float in_size;

uniform mat4 u_mvp;
uniform float u_proj_scale;
uniform float u_viewport_h;

out vec4 v_color;

void main() {
    gl_Position = u_mvp * vec4(in_pos, 1.0);
    gl_PointSize = max(2.0, 2.0 * in_size * u_proj_scale * 0.5 * u_viewport_h / gl_Position.w);
    v_color = in_color;
}
"""

POINT_FS = """
#version 330

in vec4 v_color;
out vec4 fragColor;

void main() {
    vec2 c = gl_PointCoord * 2.0 - 1.0;
    float r2 = dot(c, c);
    if (r2 > 1.0) discard;
    float shade = 0.55 + 0.45 * sqrt(1.0 - r2);
    fragColor = vec4(v_color.rgb * shade, v_color.a);
}
"""

LINE_VS = """
#version 330

in vec3 in_pos;
in vec4 in_color;

uniform mat4 u_mvp;

out vec4 v_color;

void main() {
    gl_Position = u_mvp * vec4(in_pos, 1.0);
    v_color = in_color;
}
"""

LINE_FS = """
#version 330

in vec4 v_color;
out vec4 fragColor;

void main() {
    fragColor = v_color;
}
"""


class NetworkApp(mglw.WindowConfig):
    """Main application window."""

    gl_version = (3, 3)
    title = TITLE
    window_size = (1280, 720)
    aspect_ratio = None
    resizable = True

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("--seed", type=int, default=None, help="Seed for graph and idle opacity")
        parser.add_argument("--nodes", type=int, default=None, help="Override node count")
        parser.add_argument("--config", type=str, default=None, help="Session config JSON file")
        parser.add_argument("--debug-signals", action="store_true", help="Log every signal emitted")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.ctx.enable(moderngl.BLEND | moderngl.PROGRAM_POINT_SIZE)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA

        config = self._load_config()
        self.session = NetworkSession(config)
        self.camera = CameraRig()
        self.hover = HoverTracker()
        self._debugger = None
        if self.argv.debug_signals:
            self._debugger = SignalDebugger(self.session.bridge)
            self._debugger.watch_all()

        self._connect_signals()
        self._create_pipelines()

    def _load_config(self) -> SessionConfig:
        config = load_config(self.argv.config) if self.argv.config else SessionConfig()
        if self.argv.seed is not None:
            config.seed = self.argv.seed
        if self.argv.nodes is not None:
            config.graph.node_count = self.argv.nodes
        return config.validate()

    def _connect_signals(self):
        bridge = self.session.bridge

        @on_signal(bridge, SIGNAL_KEYWORDS_REVEALED)
        def _keywords(state):
            self.wnd.title = f"{TITLE} - Automate / Optimize / Analyze / Connect"

        @on_signal(bridge, SIGNAL_SKIP_AVAILABLE)
        def _skip():
            logger.info("Press S to skip the animation")

        @on_signal(bridge, SIGNAL_COMPLETE)
        def _complete():
            self.wnd.title = f"{TITLE} - Enter"
            logger.info("Network complete; host would now show the dashboard")

    # -------------------------------------------------------------------------
    # GPU Resources
    # -------------------------------------------------------------------------

    def _create_pipelines(self):
        graph = self.session.graph
        anim = self.session.config.animation

        point_capacity = graph.node_count + graph.edge_count * anim.particle_count + 8
        line_capacity = graph.edge_count * 2

        self.point_prog = self.ctx.program(vertex_shader=POINT_VS, fragment_shader=POINT_FS)
        self.line_prog = self.ctx.program(vertex_shader=LINE_VS, fragment_shader=LINE_FS)

        self.point_vbo = self.ctx.buffer(reserve=max(1, point_capacity) * POINT_STRIDE * 4, dynamic=True)
        self.line_vbo = self.ctx.buffer(reserve=max(1, line_capacity) * LINE_STRIDE * 4, dynamic=True)

        self.point_vao = self.ctx.vertex_array(
            self.point_prog, [(self.point_vbo, '3f 4f 1f', 'in_pos', 'in_color', 'in_size')]
        )
        self.line_vao = self.ctx.vertex_array(
            self.line_prog, [(self.line_vbo, '3f 4f', 'in_pos', 'in_color')]
        )

    # -------------------------------------------------------------------------
    # Render Loop
    # -------------------------------------------------------------------------

    def on_render(self, time: float, frame_time: float):
        snapshot = self.session.update(frame_time)

        w, h = self.wnd.buffer_size
        self.ctx.viewport = (0, 0, w, h)
        self.ctx.clear(0.05, 0.05, 0.07, 1.0)
        if snapshot is None:
            return

        proj = self.camera.projection(w / max(1, h))
        mvp = (proj @ self.camera.view()).astype('f4')
        mvp_bytes = mvp.T.tobytes()

        lines = self._line_vertices(snapshot)
        if len(lines):
            self.line_vbo.write(lines.tobytes())
            self.line_prog['u_mvp'].write(mvp_bytes)
            self.line_vao.render(mode=moderngl.LINES, vertices=len(lines))

        points = self._point_vertices(snapshot)
        if len(points):
            self.point_vbo.write(points.tobytes())
            self.point_prog['u_mvp'].write(mvp_bytes)
            self.point_prog['u_proj_scale'].value = float(proj[1, 1])
            self.point_prog['u_viewport_h'].value = float(h)
            self.point_vao.render(mode=moderngl.POINTS, vertices=len(points))

    def _line_vertices(self, snapshot: FrameSnapshot) -> np.ndarray:
        rows: List[List[float]] = []
        for edge in snapshot.edges:
            r, g, b, _ = edge.color
            rows.append([*edge.start, r, g, b, edge.opacity])
            rows.append([*edge.end, r, g, b, edge.opacity])
        return np.array(rows, dtype='f4').reshape(-1, LINE_STRIDE)

    def _point_vertices(self, snapshot: FrameSnapshot) -> np.ndarray:
        rows: List[List[float]] = []
        for node in snapshot.nodes:
            color = Color(*node.color).scaled(0.6 + 0.2 * node.emissive_intensity)
            rows.append([*node.position, color.r, color.g, color.b, node.opacity, node.size])
        r, g, b, _ = self.session.composer.color.to_tuple()
        for particle in snapshot.particles:
            rows.append([*particle.position, r, g, b, particle.opacity, PARTICLE_SIZE])
        for label in snapshot.labels:
            r, g, b, _ = label.color
            rows.append([*label.position, r, g, b, label.opacity, LABEL_ANCHOR_SIZE])
        return np.array(rows, dtype='f4').reshape(-1, POINT_STRIDE)

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def on_mouse_position_event(self, x, y, dx, dy):
        w, h = self.wnd.size
        view_proj = self.camera.view_proj(w, h)
        proj_scale = float(self.camera.projection(w / max(1, h))[1, 1])
        picked = pick_node(self.session.graph, view_proj, w, h, x, y, proj_scale)
        self.hover.apply(self.session, picked)

    def on_key_event(self, key, action, modifiers):
        keys = self.wnd.keys
        if action == keys.ACTION_PRESS and key == keys.S and self.session.skip_available:
            self.session.skip()

    def on_close(self):
        if self._debugger is not None:
            self._debugger.detach()
        self.session.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mglw.run_window_config(NetworkApp)
