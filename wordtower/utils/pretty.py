"""Pretty-print helpers for tower floors and score reports."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, Optional

from ..core.constants import CellType

if TYPE_CHECKING:
    from ..engine.grid import SpatialGrid
    from ..engine.validator import TowerReport


SYMBOLS = {
    CellType.BLOCKER: "#",
    CellType.EMPTY: ".",
}


def cell_symbol(cell) -> str:
    if cell.type == CellType.LETTER:
        return cell.letter or "?"
    return SYMBOLS.get(cell.type, ".")


def format_floor(grid: SpatialGrid, z: int) -> str:
    """Render one floor as a y-by-x slice, x across and y down."""

    layer = grid.layer(z)
    width = grid.bounds.width
    header_cells = [f"{x:>2}" for x in range(width)]
    lines = [f"z={z}", "    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for y, row in enumerate(layer):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{y:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_floors(
    grid: SpatialGrid,
    floors: Optional[Iterable[int]] = None,
    *,
    stream=None,
) -> None:
    """Print every occupied floor (or the given ones) of the grid."""

    stream = stream or sys.stdout
    for z in floors if floors is not None else grid.occupied_floors():
        print(format_floor(grid, z), file=stream)
        print(file=stream)


def print_report(report: TowerReport, *, stream=None) -> None:
    """Print the validity verdict and the per-floor score breakdown."""

    stream = stream or sys.stdout
    print("--- Tower ---", file=stream)
    print(f"  Valid:         {'yes' if report.is_valid else 'no'}", file=stream)
    if report.invalid_reason:
        print(f"  Reason:        {report.invalid_reason}", file=stream)
    print(f"  Score:         {report.score:.2f}", file=stream)

    if not report.floors:
        return
    print(file=stream)
    print("--- Floors ---", file=stream)
    for floor in report.floors:
        print(
            f"  z={floor.z:>4}  letters={floor.letter_count:>3}  "
            f"box={floor.width}x{floor.depth}  prop={floor.proportion:.2f}  "
            f"density={floor.density:.2f}  x{floor.multiplier}  "
            f"score={floor.score:.2f}",
            file=stream,
        )
