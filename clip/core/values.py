"""Runtime values of the clip language: a closed set of tagged variants. Values are immutable once produced;
"mutating" a variable rebinds it in its Environment instead.

Every value knows its type tag (type_name) and how to render itself for the shell, which prints values as
`<type_name> : <rendering>`, e.g. `integer : 5`.
"""

from dataclasses import dataclass, field

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class Value:
    """Superclass of every runtime value."""
    type_name = "value"

    def render(self):
        """Returns the value as the shell displays it."""
        raise NotImplementedError

    def __str__(self):
        return f"{self.type_name} : {self.render()}"


@dataclass(frozen=True)
class Integer(Value):
    val: int
    type_name = "integer"

    def render(self):
        return str(self.val)


@dataclass(frozen=True)
class Float(Value):
    val: float
    type_name = "float"

    def render(self):
        return repr(self.val)


@dataclass(frozen=True)
class String(Value):
    val: str
    type_name = "string"

    def render(self):
        return self.val


@dataclass(frozen=True)
class Boolean(Value):
    val: bool
    type_name = "boolean"

    def render(self):
        return "true" if self.val else "false"


@dataclass(frozen=True)
class Unit(Value):
    """The single null-like value, written (). Always equal to itself and only to itself."""
    type_name = "unit"

    def render(self):
        return "()"


@dataclass(frozen=True, eq=False)
class Function(Value):
    """A closure: parameter names and body of a function literal, plus the Environment it was evaluated in. The
    environment is shared with every other holder of it, so it lives as long as the longest-lived closure over it.
    Functions are equal only to themselves.
    """
    param_names: tuple
    body: tuple
    env: object = field(repr=False)
    type_name = "function"

    def render(self):
        params = f"[{' '.join(self.param_names)}] " if self.param_names else ""
        return f"{{ {params}... }}"


UNIT = Unit()


def wrap(num):
    """Wraps num into the 64-bit signed range, two's complement style."""
    return (num - INT_MIN) % 2 ** 64 + INT_MIN
