# litforge/store.py
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .models.blocks import Block, block_name
from .utils.paths import same_path


class BlockStore:
    """
    In-memory collection of blocks from every scanned document.

    Names are unique within a kind only. When two blocks of the same kind share
    a name, the one added last wins in ``find_by_name``; ``blocks_of_kind``
    still lists both in insertion order.
    """

    def __init__(self, blocks: Iterable[Block] = ()) -> None:
        self._by_kind: Dict[str, List[Block]] = {}
        self._by_name: Dict[Tuple[str, str], Block] = {}
        self.extend(blocks)

    def add_block(self, block: Block) -> None:
        self._by_kind.setdefault(block.kind, []).append(block)
        name = block_name(block)
        if name is not None:
            self._by_name[(block.kind, name)] = block

    def extend(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            self.add_block(block)

    def blocks_of_kind(self, kind: str) -> Tuple[Block, ...]:
        return tuple(self._by_kind.get(kind, ()))

    def find_by_name(self, kind: str, name: str) -> Optional[Block]:
        return self._by_name.get((kind, name))

    def find_qualified(self, kind: str, source: str, name: str, root: str = ".") -> Optional[Block]:
        """
        Find the block of `kind` named `name` that came from document `source`.
        `source` may be absolute or relative to `root`; the last match wins.
        """
        for block in reversed(self._by_kind.get(kind, ())):
            if block_name(block) != name:
                continue
            if block.source_file == source or same_path(source, block.source_file, root):
                return block
        return None

    def __iter__(self) -> Iterator[Block]:
        for blocks in self._by_kind.values():
            yield from blocks

    def __len__(self) -> int:
        return sum(len(blocks) for blocks in self._by_kind.values())

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind}={len(blocks)}" for kind, blocks in sorted(self._by_kind.items()))
        return f"BlockStore({counts})"
