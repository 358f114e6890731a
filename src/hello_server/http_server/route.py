from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    # None matches all HTTP methods.
    verb: str | None
    # A path ending with "/" matches all paths under it, i.e. "/" matches everything.
    # Other paths match only themselves.
    path: str

    def matches(self, verb: str, path: str) -> bool:
        if self.verb is not None and self.verb != verb:
            return False
        if self.path.endswith("/"):
            return path.startswith(self.path)
        return path == self.path
