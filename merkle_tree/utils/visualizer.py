"""
Merkle Tree CLI Visualizer
==========================

This module provides a colorful terminal view of a Merkle tree using the
``rich`` library. It makes it easy to inspect how the leaves are padded,
how each level is folded into the next, and how an inclusion proof climbs
from a leaf to the root.

The visualizer does not modify the tree; it is purely a read-only
presentation layer. Every view recomputes what it needs from the tree's
current leaves.

Features:

- **Summary panel**: leaf count, padded length, depth, and root.

- **Leaf table**: one row per padded leaf, with padding rows marked.

- **Level table**: one row per tree level, from the padded leaves up to the
  root.

- **Tree diagram**: the full binary tree drawn from the root down.

- **Proof view**: the steps of an inclusion proof, the side each sibling is
  concatenated on, and whether the proof verifies against the root.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from merkle_tree.crypto.merkle import padded_length, verify_proof
from merkle_tree.utils.encoding import bytes_to_hex

if TYPE_CHECKING:
    from merkle_tree.crypto.merkle import MerkleTree

logger = logging.getLogger(__name__)


def _truncate_hash(digest: bytes, length: int = 16) -> str:
    """Return the first *length* hex characters of a digest."""
    return bytes_to_hex(digest)[:length]


class TreeVisualizer:
    """
    Rich CLI visualizer for a Merkle tree.

    Attributes:
        tree: The MerkleTree instance to visualize.
        console: A ``rich.console.Console`` used for all output.
        hash_length: Number of hex characters shown per digest.
    """

    def __init__(
        self,
        tree: "MerkleTree",
        console: Console | None = None,
        hash_length: int = 16,
    ) -> None:
        """
        Initialize the visualizer.

        Args:
            tree: The MerkleTree instance to visualize.
            console: Console to print to. Defaults to a new stdout console.
            hash_length: Number of hex characters shown per digest.
        """
        self.tree = tree
        self.console = console if console is not None else Console()
        self.hash_length = hash_length

    def _short(self, digest: bytes) -> str:
        return _truncate_hash(digest, self.hash_length)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def print_summary(self) -> None:
        """
        Print high-level facts about the tree.

        Includes the real and padded leaf counts, the depth (which is also
        the length of every inclusion proof), and the full root digest.
        """
        count = self.tree.count_leaves()
        padded = padded_length(count)
        depth = (padded - 1).bit_length()

        info = (
            f"[bold]Leaves:[/bold]         {count:,}\n"
            f"[bold]Padded Leaves:[/bold]  {padded:,}\n"
            f"[bold]Depth:[/bold]          {depth}\n"
            f"[bold]Digest Size:[/bold]    {self.tree.digest_size} bytes\n"
            f"[bold]Root:[/bold]           {self.tree.get_root_hex()}"
        )

        self.console.print(Panel(info, title="Merkle Tree", border_style="cyan"))

    # ------------------------------------------------------------------
    # Leaves and levels
    # ------------------------------------------------------------------

    def print_leaves(self, max_rows: int = 50) -> None:
        """
        Print the padded leaf sequence as a table.

        Rows past the last real leaf are marked as padding.

        Args:
            max_rows: Maximum number of rows to render.
        """
        count = self.tree.count_leaves()
        padded = self.tree.get_levels()[0]

        table = Table(
            title="Leaves",
            show_header=True,
            header_style="bold cyan",
            border_style="blue",
        )
        table.add_column("Index", style="bold white", justify="right")
        table.add_column("Digest", style="green")
        table.add_column("Kind", style="yellow")

        for index, digest in enumerate(padded):
            if index >= max_rows:
                table.add_row("...", "...", "...")
                break
            kind = "leaf" if index < count else "[dim]padding[/dim]"
            table.add_row(str(index), self._short(digest), kind)

        self.console.print(table)

    def print_levels(self) -> None:
        """
        Print every level of the tree, from the padded leaves to the root.

        Each row shows the level number (0 for the leaves), the number of
        nodes on that level, and the first few node digests.
        """
        levels = self.tree.get_levels()

        table = Table(
            title="Levels",
            show_header=True,
            header_style="bold magenta",
            border_style="magenta",
        )
        table.add_column("Level", justify="right", style="bold white")
        table.add_column("Nodes", justify="right", style="magenta")
        table.add_column("Digests", style="green")

        for height, level in enumerate(levels):
            shown = [self._short(digest) for digest in level[:4]]
            if len(level) > 4:
                shown.append("...")
            table.add_row(str(height), str(len(level)), " ".join(shown))

        self.console.print(table)

    # ------------------------------------------------------------------
    # Tree diagram
    # ------------------------------------------------------------------

    def print_tree(self) -> None:
        """
        Draw the whole tree as a diagram, root first.

        Every node is labelled with its level, its position on that level,
        and its digest. Padding leaves are dimmed.
        """
        levels = self.tree.get_levels()
        count = self.tree.count_leaves()
        top = len(levels) - 1

        def _label(height: int, position: int) -> str:
            digest = self._short(levels[height][position])
            if height == top:
                return f"[bold green]root[/bold green] {digest}"
            if height == 0 and position >= count:
                return f"[dim]L0[{position}] {digest} (padding)[/dim]"
            return f"[bold]L{height}[{position}][/bold] {digest}"

        def _build_tree(height: int, position: int, parent_node: Tree) -> None:
            if height == 0:
                return
            for child in (2 * position, 2 * position + 1):
                child_node = parent_node.add(_label(height - 1, child))
                _build_tree(height - 1, child, child_node)

        tree = Tree(_label(top, 0), guide_style="blue")
        _build_tree(top, 0, tree)

        self.console.print(Panel(tree, title="Merkle Tree", border_style="blue"))

    # ------------------------------------------------------------------
    # Proof view
    # ------------------------------------------------------------------

    def print_proof(self, leaf_index: int) -> None:
        """
        Print the inclusion proof for one leaf and check it.

        Each step shows the sibling digest and whether the running value is
        hashed on the left (``H(value || sibling)``) or the right
        (``H(sibling || value)``) of it.

        Args:
            leaf_index: Zero-based index of the leaf to prove.
        """
        try:
            proof = self.tree.generate_proof(leaf_index)
        except IndexError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return

        leaf = self.tree.get_levels()[0][leaf_index]
        root = self.tree.get_root()

        table = Table(
            title=f"Proof for leaf {leaf_index}",
            show_header=True,
            header_style="bold cyan",
            border_style="cyan",
        )
        table.add_column("Step", justify="right", style="dim")
        table.add_column("Index", justify="right")
        table.add_column("Sibling", style="green")
        table.add_column("Combine", style="yellow")

        current_index = leaf_index
        for step, sibling in enumerate(proof):
            combine = "H(value || sibling)" if current_index % 2 == 0 else "H(sibling || value)"
            table.add_row(str(step), str(current_index), self._short(sibling), combine)
            current_index //= 2

        self.console.print(table)

        valid = verify_proof(proof, root, leaf, leaf_index, self.tree.hash_function)
        if valid:
            self.console.print(f"[bold green]Proof valid[/bold green] for root {self._short(root)}")
        else:
            logger.warning("Generated proof for leaf %d did not verify", leaf_index)
            self.console.print(f"[bold red]Proof INVALID[/bold red] for root {self._short(root)}")
