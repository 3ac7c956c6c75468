"""CSV export of a single bundle's fields."""

import csv
import io
from typing import TextIO

from bs4 import BeautifulSoup

from content_model_report.domain.constants import EXPORT_HEADER, FLAG_LABELS
from content_model_report.domain.models import FieldReport
from content_model_report.domain.pair_key import make_key


def strip_markup(text: str) -> str:
    """Remove markup tags from a rich-text description."""
    if not text:
        return ''
    return BeautifulSoup(text, 'html.parser').get_text()


class CSVExporter:
    """Writes one row per field under a fixed header.

    Multi-value cells (label and machine name, type label and type ID,
    references) are newline-joined within the cell.
    """

    def write(self, fields: dict[str, FieldReport], stream: TextIO) -> None:
        writer = csv.writer(stream)
        writer.writerow(EXPORT_HEADER)
        for name, record in fields.items():
            writer.writerow(self._row(name, record))

    def render(self, fields: dict[str, FieldReport]) -> str:
        buffer = io.StringIO()
        self.write(fields, buffer)
        return buffer.getvalue()

    @staticmethod
    def export_filename(type_id: str, bundle_id: str) -> str:
        return f'{make_key(type_id, bundle_id)}.csv'

    @staticmethod
    def _row(name: str, record: FieldReport) -> list[str]:
        return [
            '\n'.join([record.label, name]),
            '\n'.join([record.type_label, record.type]),
            '\n'.join(record.references),
            FLAG_LABELS[bool(record.required)],
            FLAG_LABELS[bool(record.translatable)],
            strip_markup(record.description),
        ]
