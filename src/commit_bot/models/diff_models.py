"""Models for representing diffs, diff segments and diff statistics."""

from pydantic import BaseModel, ConfigDict, Field


class FileDiffBlock(BaseModel):
    """One file's complete diff: header line plus every hunk."""

    model_config = ConfigDict(frozen=True)

    path: str  # Post-image path ("b/..."), pre-image path for deletions
    text: str  # Exact block text, byte-for-byte from the raw diff


class DiffSegment(BaseModel):
    """An ordered run of whole file blocks sent to the summarizer as one request."""

    model_config = ConfigDict(frozen=True)

    index: int  # Position in the segment sequence (0-based)
    blocks: tuple[FileDiffBlock, ...]
    payload: str  # Concatenation of block texts
    length: int  # len(payload) in characters

    @classmethod
    def from_blocks(cls, index: int, blocks: list[FileDiffBlock]) -> "DiffSegment":
        """Build a segment whose payload is the exact concatenation of *blocks*."""
        payload = "".join(block.text for block in blocks)
        return cls(index=index, blocks=tuple(blocks), payload=payload, length=len(payload))

    @property
    def file_paths(self) -> list[str]:
        return [block.path for block in self.blocks]


class DiffStats(BaseModel):
    """Whole-diff aggregate statistics, independent of segmentation."""

    model_config = ConfigDict(frozen=True)

    files_changed: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    file_types: frozenset[str] = Field(default_factory=frozenset)
    file_type_counts: dict[str, int] = Field(default_factory=dict)

    def dominant_file_types(self) -> list[tuple[str, int]]:
        """Return (file_type, count) pairs, most frequent first, ties by name."""
        return sorted(self.file_type_counts.items(), key=lambda item: (-item[1], item[0]))
