from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from cell_coercion import as_text
from errors import FieldNotFound, RowNotFound
from field_kinds import FieldKind, ViewMode
from row_store import ID_COLUMN
from search_annotator import SearchAnnotation, annotate, describe_view
from selection import CellRef, EditSession, SelectionMode
from view_pipeline import derive_view


@dataclass(frozen=True)
class ColumnHeader:
    field_key: str
    label: str
    width: int
    kind: FieldKind
    built_in: bool


@dataclass
class GridProjection:
    """Everything a renderer needs for one frame. Read-only by convention."""

    rows: pd.DataFrame
    columns: list
    annotation: SearchAnnotation
    mode: SelectionMode
    selected: Optional[CellRef] = None
    multi: set = field(default_factory=set)
    edit: Optional[EditSession] = None
    view_mode: ViewMode = ViewMode.NORMAL
    summary: list = field(default_factory=list)

    @property
    def row_ids(self) -> list:
        return [int(v) for v in self.rows[ID_COLUMN].tolist()]

    @property
    def match_count(self) -> int:
        return self.annotation.match_count

    def cell_text(self, row_id, field_key: str) -> str:
        hits = self.rows.loc[self.rows[ID_COLUMN] == row_id, field_key]
        if hits.empty:
            raise RowNotFound(row_id)
        return as_text(hits.iloc[0])


class GridView:
    """Read-only projection of the store through the current view spec."""

    def __init__(self, ctx):
        self.ctx = ctx

    # ---------- columns ----------
    def visible_columns(self, spec=None) -> list:
        spec = spec if spec is not None else self.ctx.view_spec
        return self.ctx.registry.visible_columns(spec.hidden_fields)

    def visible_fields(self, spec=None) -> list:
        return [c.field_key for c in self.visible_columns(spec)]

    def field_at(self, col: int) -> str:
        fields = self.visible_fields()
        if col is None or col < 0 or col >= len(fields):
            raise FieldNotFound(f"column #{col}")
        return fields[col]

    def col_of(self, field_key: str) -> Optional[int]:
        fields = self.visible_fields()
        return fields.index(field_key) if field_key in fields else None

    def headers(self, spec=None) -> list:
        registry = self.ctx.registry
        return [
            ColumnHeader(c.field_key, c.label, registry.width_of(c.field_key), c.kind, c.is_built_in)
            for c in self.visible_columns(spec)
        ]

    # ---------- rows ----------
    def processed_view(self, spec=None) -> pd.DataFrame:
        spec = spec if spec is not None else self.ctx.view_spec
        key = (
            self.ctx.registry.version,
            self.ctx.store.version,
            spec.filter_field,
            spec.filter_value,
            spec.sort_field,
            spec.sort_order,
        )
        cached = self.ctx.view_cache
        if cached is not None and cached[0] == key:
            return cached[1]
        view = derive_view(
            self.ctx.store.df,
            spec,
            self.ctx.registry.kinds(),
            self.ctx.config.get("DATE_FORMAT", "%d-%m-%Y"),
        )
        self.ctx.view_cache = (key, view)
        return view

    def view_row_ids(self, spec=None) -> list:
        return [int(v) for v in self.processed_view(spec)[ID_COLUMN].tolist()]

    def row_id_at(self, row_index: int) -> int:
        ids = self.view_row_ids()
        if row_index is None or row_index < 0 or row_index >= len(ids):
            raise RowNotFound(f"#{row_index}")
        return ids[row_index]

    def require_cell(self, cell: CellRef) -> CellRef:
        cell = CellRef(*cell)
        if cell.row_id not in self.ctx.store:
            raise RowNotFound(cell.row_id)
        self.field_at(cell.col)
        return cell

    # ---------- projection ----------
    def project(self, spec=None) -> GridProjection:
        spec = spec if spec is not None else self.ctx.view_spec
        view = self.processed_view(spec)
        fields = self.visible_fields(spec)
        rows = view[[ID_COLUMN] + fields]
        annotation = annotate(rows, fields, spec.search_term)
        selection = self.ctx.selection
        return GridProjection(
            rows=rows,
            columns=self.headers(spec),
            annotation=annotation,
            mode=selection.mode,
            selected=selection.cell,
            multi=set(selection.multi),
            edit=selection.edit,
            view_mode=spec.view_mode,
            summary=describe_view(spec, annotation),
        )
