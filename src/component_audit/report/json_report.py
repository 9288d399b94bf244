"""Structured (JSON) rendering of an AnalysisReport."""
import json
from typing import Optional

from ..analyzer.manifest import ProjectManifest
from ..analyzer.models import AnalysisReport


def build_payload(report: AnalysisReport, manifest: Optional[ProjectManifest] = None):
    """Return the JSON-ready payload.

    Without a manifest this is the plain list of component records; with one
    it is wrapped as {"project": ..., "components": [...]}.
    """
    components = [row.to_record() for row in report]
    if manifest is None:
        return components
    return {
        'project': manifest.to_dict(),
        'components': components,
    }


def render_json(report: AnalysisReport, manifest: Optional[ProjectManifest] = None) -> str:
    return json.dumps(build_payload(report, manifest), indent=2, ensure_ascii=False) + '\n'
