"""Source path display for call sites."""

from __future__ import annotations

from enum import Enum

from .models import Call, Signature


class PathFormat(Enum):
    """How much of a call's source path to show."""
    FULL = "full"
    REL = "rel"
    BASE = "base"

    def format_call(self, call: Call) -> str:
        """Return ``"<path>:<line>"`` for the call.

        ``REL`` uses the project relative path when known and otherwise
        behaves like ``FULL``, which prefers the local path over the remote
        one. ``BASE`` shows the file name only.
        """
        if self is PathFormat.BASE:
            return f"{call.src_name}:{call.line}"
        if self is PathFormat.REL and call.rel_src_path:
            return f"{call.rel_src_path}:{call.line}"
        if call.local_src_path:
            return f"{call.local_src_path}:{call.line}"
        return f"{call.remote_src_path}:{call.line}"

    def created_by_string(self, signature: Signature) -> str:
        """Describe the call that spawned the goroutine, or ``""``."""
        if not signature.created_by.calls:
            return ""
        call = signature.created_by.calls[0]
        return f"{call.func.dir_name}.{call.func.name} @ {self.format_call(call)}"
