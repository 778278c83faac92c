"""Lexical environments. An Environment maps names to Values and points at its parent (None at top level); lookups
walk the chain from innermost to outermost.

A session owns one top-level Environment. Every call creates a new Environment whose parent is the environment
captured by the called Function (lexical, not dynamic, scoping). Function values hold plain references to the
environments they capture, so an Environment stays alive exactly as long as something still refers to it.
"""

from clip.core import errors


class Environment:
    def __init__(self, parent=None, bindings=None):
        self.parent = parent
        self._store = dict(bindings or {})

    def lookup(self, name, line=-1, col=-1):
        """Returns the value bound to name in the nearest scope defining it. Raises NameError if there is none."""
        env = self.owner(name)
        if env is None:
            raise errors.NameError(f"undefined variable {name}", line, col)
        return env._store[name]

    def assign(self, name, val):
        """Rebinds name in the nearest scope that already defines it, or binds it here if none does."""
        env = self.owner(name)
        (self if env is None else env)._store[name] = val
        return val

    def owner(self, name):
        """Returns the nearest Environment in the chain that defines name, or None."""
        env = self
        while env is not None:
            if name in env._store:
                return env
            env = env.parent
        return None

    def child(self, bindings=None):
        """Returns a new Environment parented to this one."""
        return Environment(self, bindings)

    def names(self):
        """Names bound directly in this scope."""
        return list(self._store)

    def __contains__(self, name):
        return self.owner(name) is not None

    def __repr__(self):
        return f"Environment(names={self.names()}, parent={'None' if self.parent is None else '...'})"
