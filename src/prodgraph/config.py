from enum import Enum

from attrs import evolve, frozen

from prodgraph.core.types import NodeId


class RenderMode(Enum):
    IDS = "ids"  # ids on placeholders, current node boxed
    PLAIN = "plain"
    FULL = "full"  # ids on every node


@frozen
class ExportOptions:
    show_ids: bool = True
    show_ids_on_terminals: bool = False
    highlight: NodeId | None = None

    def resolved(self) -> "ExportOptions":
        """Return options with show_ids forced on when terminal ids are requested."""
        if self.show_ids_on_terminals and not self.show_ids:
            return evolve(self, show_ids=True)
        return self

    @classmethod
    def for_mode(cls, mode: RenderMode, highlight: NodeId | None = None) -> "ExportOptions":
        """Options used by the three redraw modes; plain drawings are never highlighted.

        Params:
            mode: Requested render mode.
            highlight: Current node, boxed in IDS and FULL modes.

        Returns:
            Matching `ExportOptions`.
        """
        if mode is RenderMode.PLAIN:
            return cls(show_ids=False)
        return cls(
            show_ids=True,
            show_ids_on_terminals=mode is RenderMode.FULL,
            highlight=highlight,
        )
