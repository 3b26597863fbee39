# cogniflow/core/signal.py
"""
SignalBridge - Observer hub routing session events to hosts and subscribers.

The session is the only emitter. Hosts subscribe with `connect` or the
`on_signal` decorator and keep the returned Connection to detach later.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Tuple
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Session Signals
# =============================================================================

SIGNAL_DT = 'dt'                                    # (dt,)
SIGNAL_INTERACT = 'interact'                        # (position,)
SIGNAL_NODE_HOVER = 'node_hover'                    # (node_id,)
SIGNAL_NODE_UNHOVER = 'node_unhover'                # (node_id,)
SIGNAL_ACTIVATION_CHANGED = 'activation_changed'    # (ActivationState,)
SIGNAL_KEYWORDS_REVEALED = 'keywords_revealed'      # (ActivationState,)
SIGNAL_TRANSFORMING = 'transforming'                # (ActivationState,)
SIGNAL_SKIP_AVAILABLE = 'skip_available'            # ()
SIGNAL_COMPLETE = 'complete'                        # ()
SIGNAL_DISPOSED = 'disposed'                        # ()


# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Handle returned by SignalBridge.connect."""
    signal: str
    handler_id: int
    bridge: SignalBridge = None

    @property
    def connected(self) -> bool:
        return self.bridge is not None

    def disconnect(self):
        if self.bridge is not None:
            self.bridge._remove(self.signal, self.handler_id)
            self.bridge = None


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """
    Synchronous signal hub.

    Handlers run on the emitting thread, which for a session is the frame
    thread. A handler that raises is logged and the next handler still runs.
    Disconnecting from inside a handler takes effect once the outermost emit
    returns.
    """

    def __init__(self):
        self._handlers: Dict[str, Dict[int, Callable]] = {}
        self._next_id: int = 0
        self._dispatch_depth: int = 0
        self._deferred: List[Tuple[str, int]] = []

    def connect(self, signal: str, handler: Callable) -> Connection:
        handler_id = self._next_id
        self._next_id += 1
        self._handlers.setdefault(signal, {})[handler_id] = handler
        return Connection(signal=signal, handler_id=handler_id, bridge=self)

    def emit(self, signal: str, *args, **kwargs):
        handlers = self._handlers.get(signal)
        if not handlers:
            return

        self._dispatch_depth += 1
        try:
            for handler in list(handlers.values()):
                try:
                    handler(*args, **kwargs)
                except Exception:
                    logger.exception("Signal handler error [%s]", signal)
        finally:
            self._dispatch_depth -= 1
            if self._dispatch_depth == 0 and self._deferred:
                deferred, self._deferred = self._deferred, []
                for sig, handler_id in deferred:
                    self._drop(sig, handler_id)

    def _remove(self, signal: str, handler_id: int):
        if self._dispatch_depth > 0:
            self._deferred.append((signal, handler_id))
        else:
            self._drop(signal, handler_id)

    def _drop(self, signal: str, handler_id: int):
        handlers = self._handlers.get(signal)
        if handlers is not None:
            handlers.pop(handler_id, None)
            if not handlers:
                del self._handlers[signal]


# =============================================================================
# Signal Debugger
# =============================================================================

class SignalDebugger:
    """Wraps a bridge's emit to log watched signals at DEBUG level."""

    def __init__(self, bridge: SignalBridge):
        self.bridge = bridge
        self._original_emit = bridge.emit
        self._watched: set = set()
        self._watch_all: bool = False
        bridge.emit = self._debug_emit

    def watch(self, signal: str):
        self._watched.add(signal)

    def watch_all(self, enabled: bool = True):
        self._watch_all = enabled

    def _debug_emit(self, signal: str, *args, **kwargs):
        if self._watch_all or signal in self._watched:
            shown = [repr(a) for a in args]
            shown.extend(f"{k}={v!r}" for k, v in kwargs.items())
            logger.debug(f"SIGNAL: {signal}({', '.join(shown)})")

        self._original_emit(signal, *args, **kwargs)

    def detach(self):
        self.bridge.emit = self._original_emit


def on_signal(bridge: SignalBridge, signal: str):
    """Decorator to connect a function to a signal."""
    def decorator(func):
        bridge.connect(signal, func)
        return func
    return decorator
