"""Agrupación de reportes duplicados y filtrado para el tablero.

Un "duplicado" es cualquier reporte con el mismo par (edificio, categoría).
Todas las funciones son puras: reciben la lista completa de reportes,
ordenada del más reciente al más antiguo, y un BoardState inmutable.
"""
from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from app.models.report import GroupKey, Report

ALL_BUILDINGS = "All Buildings"
ALL_CONCERNS = "All Concerns"


@dataclass(frozen=True)
class BoardState:
    building_filter: str = ALL_BUILDINGS
    concern_filter: str = ALL_CONCERNS
    show_duplicates: bool = False
    selected_group: Optional[GroupKey] = None

    def with_building(self, value: str) -> "BoardState":
        return replace(self, building_filter=value)

    def with_concern(self, value: str) -> "BoardState":
        return replace(self, concern_filter=value)

    def toggle_duplicates(self) -> "BoardState":
        # Salir de la vista de grupo para mantener la interfaz consistente
        return replace(self, show_duplicates=not self.show_duplicates, selected_group=None)

    def select_group(self, key: GroupKey) -> "BoardState":
        return replace(self, selected_group=key)

    def back(self) -> "BoardState":
        return replace(self, selected_group=None)


@dataclass(frozen=True)
class BoardEntry:
    report: Report
    key: GroupKey
    group_size: int
    similar_count: int = 0  # > 0 habilita "View N similar reports"
    badge_count: int = 0  # > 0 muestra "N in group"


@dataclass(frozen=True)
class BoardView:
    entries: List[BoardEntry]
    building_options: List[str]
    concern_options: List[str]
    selected_group: Optional[GroupKey] = None
    show_duplicates: bool = False

    @property
    def is_group_view(self) -> bool:
        return self.selected_group is not None


def group_key(report) -> GroupKey:
    return GroupKey(report.building, report.concern)


def group_counts(reports: Iterable[Report]) -> Counter:
    return Counter(group_key(r) for r in reports)


def unique_reports(reports: Iterable[Report]) -> List[Report]:
    """Un representante por grupo: el primero en aparecer (el más reciente)."""
    seen = set()
    unique = []
    for report in reports:
        key = group_key(report)
        if key in seen:
            continue
        seen.add(key)
        unique.append(report)
    return unique


def apply_filters(reports: Iterable[Report], building_filter: str = ALL_BUILDINGS,
                  concern_filter: str = ALL_CONCERNS) -> List[Report]:
    return [
        r for r in reports
        if (building_filter == ALL_BUILDINGS or r.building == building_filter)
        and (concern_filter == ALL_CONCERNS or r.concern == concern_filter)
    ]


def _distinct(values: Iterable[Optional[str]]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v is not None))


def filter_options(reports: Sequence[Report]) -> Tuple[List[str], List[str]]:
    """Opciones de filtro derivadas de los reportes cargados, no del formulario."""
    buildings = [ALL_BUILDINGS] + _distinct(r.building for r in reports)
    concerns = [ALL_CONCERNS] + _distinct(r.concern for r in reports)
    return buildings, concerns


def reports_in_group(reports: Iterable[Report], key: GroupKey) -> List[Report]:
    return [r for r in reports if group_key(r) == key]


def build_view(reports: Sequence[Report], state: BoardState) -> BoardView:
    counts = group_counts(reports)
    buildings, concerns = filter_options(reports)

    if state.selected_group is not None:
        # La vista de grupo ignora filtros y el modo duplicados
        entries = [
            BoardEntry(report=r, key=state.selected_group, group_size=counts[state.selected_group])
            for r in reports_in_group(reports, state.selected_group)
        ]
        return BoardView(entries, buildings, concerns, state.selected_group, state.show_duplicates)

    base = list(reports) if state.show_duplicates else unique_reports(reports)
    filtered = apply_filters(base, state.building_filter, state.concern_filter)
    if state.show_duplicates:
        filtered.sort(key=lambda r: group_key(r).sort_key())

    entries = []
    for report in filtered:
        key = group_key(report)
        size = counts[key]
        if state.show_duplicates:
            entries.append(BoardEntry(report, key, size, badge_count=size if size > 1 else 0))
        else:
            entries.append(BoardEntry(report, key, size, similar_count=size - 1))
    return BoardView(entries, buildings, concerns, None, state.show_duplicates)
