"""Runtime environment for Santoku.

The Environment stores bindings of names to Values and supports nested scopes
via an `outer` link. Frames are shared by reference: every Lambda keeps its
closure frame alive, and a per-call frame points at that closure, so a chain
always ends at the single root frame that holds the builtins and every
`def`-ined name.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from santoku.types.errors import ErrorKind
from santoku.types.values import Error, Value


class Environment:
    """Hierarchical mapping from names to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        """Return the frame at the top of the chain."""
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name) -> Value:
        """Return a copy of the value bound to `name`.

        Resolution walks the local frame, then each parent in turn. An
        unbound name yields an Error value rather than raising.
        """
        key = str(name)
        env = self.find(key)
        if env is None:
            return Error(f"unbound symbol '{key}'", ErrorKind.UNBOUND)
        return env.vars[key].copy()

    def define_local(self, name, value: Value) -> None:
        """Bind `name` in this frame, replacing any existing binding here.

        The environment takes ownership of `value`.
        """
        self.vars[str(name)] = value

    def define_global(self, name, value: Value) -> None:
        """Bind `name` in the root frame."""
        self.root().define_local(name, value)

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.define_local(k, v)

    def names(self) -> list[str]:
        """All names visible from this frame, innermost first, without duplicates."""
        seen: dict[str, None] = {}
        for frame in self._chain():
            for k in frame.vars:
                seen.setdefault(k, None)
        return list(seen)

    def _chain(self) -> Iterator[Environment]:
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.outer

    def __contains__(self, name: object) -> bool:
        return str(name) in self.vars

    def _write_vars(self, buffer: StringIO) -> None:
        """Render this frame as `{name: value, ...}`."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """This frame only; ` -> ...` marks an enclosing frame."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Every frame from innermost to root."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            for frame in self._chain():
                with StringIO() as frame_buf:
                    frame._write_vars(frame_buf)
                    chain.append(frame_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
