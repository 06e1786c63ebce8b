"""
Bit-level helpers for cell codes.

A code is the path from the root cell to a cell, packed two bits per level
below a leading sentinel bit:

    root          1
    depth 1       1 qq
    depth 2       1 qq qq

so a code at depth d is exactly 2*d + 1 bits long. The sentinel keeps codes
of different depths distinct even when their quadrant bits are all zero.
"""

from typing import List

from .bbox import BoundingBox, Quadrant


ROOT_CODE = 1

# Deepest level whose codes still fit in an unsigned 64-bit integer
MAX_DEPTH_64 = 31

CODE_FORMATS = ("bin", "dec", "hex")


def is_valid_code(code: int) -> bool:
    """Check that a code is positive and has an odd bit length."""
    return code >= ROOT_CODE and code.bit_length() % 2 == 1


def _check_code(code: int) -> None:
    if not is_valid_code(code):
        raise ValueError(f"Invalid cell code: {code!r}")


def code_depth(code: int) -> int:
    """
    Number of subdivisions between the root and the cell.

    Raises:
        ValueError: If the code has no sentinel bit in a valid position
    """
    _check_code(code)
    return (code.bit_length() - 1) // 2


def child_code(code: int, quadrant: Quadrant) -> int:
    """Append a quadrant tag to a parent code."""
    return (code << 2) | quadrant


def parent_code(code: int) -> int:
    """
    Drop the last quadrant tag from a code.

    Raises:
        ValueError: For the root code or an invalid code
    """
    _check_code(code)
    if code == ROOT_CODE:
        raise ValueError("The root cell has no parent")
    return code >> 2


def ancestors(code: int) -> List[int]:
    """All ancestor codes from the root down to the direct parent."""
    depth = code_depth(code)
    return [code >> (2 * (depth - level)) for level in range(depth)]


def code_path(code: int) -> List[Quadrant]:
    """Decode the quadrant taken at each level, root first."""
    depth = code_depth(code)
    return [
        Quadrant((code >> (2 * (depth - level - 1))) & 0b11)
        for level in range(depth)
    ]


def code_from_path(path: List[Quadrant]) -> int:
    """Encode a root-first sequence of quadrants as a code."""
    code = ROOT_CODE
    for quadrant in path:
        code = child_code(code, quadrant)
    return code


def code_to_bbox(world_box: BoundingBox, code: int) -> BoundingBox:
    """
    Recover the box of a cell by replaying the bisections from the root.

    Each level is derived from its parent exactly as during a search, so
    the result is bit-for-bit the box the search assigned to the code.
    """
    box = world_box
    for quadrant in code_path(code):
        box = box.quadrant(quadrant)
    return box


def format_code(code: int, fmt: str = "bin") -> str:
    """
    Render a code as text.

    Args:
        code: Cell code
        fmt: One of "bin", "dec", "hex"
    """
    if fmt == "bin":
        return format(code, "b")
    elif fmt == "dec":
        return str(code)
    elif fmt == "hex":
        return format(code, "x")
    raise ValueError(f"Unknown code format {fmt!r}, expected one of {CODE_FORMATS}")


def parse_code(text: str) -> int:
    """
    Parse a code written as decimal, or with a 0b/0x prefix.

    Raises:
        ValueError: If the text is not an integer or not a valid code
    """
    code = int(text.strip(), 0)
    _check_code(code)
    return code
