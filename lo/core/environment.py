"""Variable bindings for a running lo program."""

from lo.lang.error import LoRuntimeError


class Environment:
    """Mutable name -> value mapping. enclosing is the scope lookups fall back to; nothing in the current grammar
    opens a nested scope, so a run only ever has the one global Environment.
    """

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        """Binds name in this scope, replacing any previous binding."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to the name token. Raises LoRuntimeError if it is unbound."""
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoRuntimeError.from_token(name, f"undefined variable '{name.lexeme}'")

    def assign(self, name, value):
        """Rebinds an existing name. Raises LoRuntimeError if it was never defined."""
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise LoRuntimeError.from_token(name, f"undefined variable '{name.lexeme}'")

    def __contains__(self, name):
        return name in self.values or (self.enclosing is not None and name in self.enclosing)

    def __repr__(self):
        return f"Environment({self.values!r})"
