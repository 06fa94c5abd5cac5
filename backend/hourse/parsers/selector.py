from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class QuerySelector:
    tag_name: str
    class_names: Tuple[str, ...] = ()
    next_tag_names: Tuple[str, ...] = ()

    def build(self) -> str:
        base = self.tag_name + "".join(f".{name}" for name in self.class_names)
        return " ".join([base, *self.next_tag_names])


def build_selector(descriptor: QuerySelector) -> str:
    return descriptor.build()
