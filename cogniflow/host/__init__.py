"""
Host helpers that need no GPU context.

The moderngl-window host itself lives in the top-level `app_mglw` module so
importing this package never pulls in a windowing backend.
"""

from cogniflow.host.picking import CameraRig, HoverTracker, pick_node, projected_radii

__all__ = ['CameraRig', 'HoverTracker', 'pick_node', 'projected_radii']
