from typing import List, Protocol, runtime_checkable

from schemagen.parsing.nodes import DeclarationNode


@runtime_checkable
class DeclarationParser(Protocol):
    """Protocol for turning schema source text into declaration nodes.

    Offsets on the returned nodes index into exactly the text passed in.
    """

    def parse(self, sql: str) -> List[DeclarationNode]:
        """Parse every statement in `sql`.

        Args:
            sql: The concatenated source text.

        Returns:
            One node per recognised statement, in source order.
        """
        ...
