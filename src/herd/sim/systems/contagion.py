from __future__ import annotations

from typing import List, Sequence, Tuple

from ..core.agent import Cell


def detect_exposures(cells: Sequence[Cell], contact_radius: float) -> Tuple[List[int], int]:
    """Find the indices of cells touching at least one ill cell other than themselves.

    Read-only: illness is judged on the state before this tick's infections are
    applied, so the result does not depend on iteration order. Returns the
    exposed indices and the number of contact checks made.
    """
    ill_indices = [index for index, cell in enumerate(cells) if cell.is_ill()]
    exposed: List[int] = []
    checks = 0
    if not ill_indices:
        return exposed, checks
    for index, cell in enumerate(cells):
        for other_index in ill_indices:
            if other_index == index:
                continue
            checks += 1
            if cells[other_index].is_close_to(cell, contact_radius):
                exposed.append(index)
                break
    return exposed, checks


def apply_infections(cells: Sequence[Cell], exposed: Sequence[int]) -> List[Cell]:
    newly_ill: List[Cell] = []
    for index in exposed:
        cell = cells[index]
        if cell.try_to_infect():
            newly_ill.append(cell)
    return newly_ill
