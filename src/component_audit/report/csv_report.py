"""Tabular (CSV) rendering of an AnalysisReport."""
import csv
import io

from ..analyzer.models import AnalysisReport

CSV_HEADER = ['Library', 'Component', 'ImportCount', 'UsageCount', 'isUsed', 'Files']
FILE_SEPARATOR = '; '


def render_csv(report: AnalysisReport) -> str:
    """One row per (library, component); strings quoted, counts bare."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator='\n')

    # Header is written unquoted
    buffer.write(','.join(CSV_HEADER) + '\n')
    for row in report:
        writer.writerow([
            row.library,
            row.component,
            row.import_count,
            row.usage_count,
            'Yes' if row.is_used else 'No',
            FILE_SEPARATOR.join(row.files),
        ])

    return buffer.getvalue()
