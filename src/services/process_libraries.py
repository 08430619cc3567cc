from __future__ import annotations

from typing import Any, Dict

from db.libraries_repo import LibrariesRepo
from db.runs_repo import RawRun
from parsers.libraries_parser import LibrariesParser
from services.rederive import RederivationService, SkipRow


class ProcessLibrariesService(RederivationService):
    table_name = "Libraries"
    repo_class = LibrariesRepo

    def build_row(self, run: RawRun) -> Dict[str, Any]:
        if run.model_info is None:
            raise SkipRow("Missing model_info data")
        if run.xformers is None:
            raise SkipRow("Missing xformers data")
        libraries = LibrariesParser.parse(run.model_info)
        return {
            "run_id": run.id,
            "torch": libraries.torch,
            "xformers": libraries.xformers,
            "xformers1": run.xformers,
            "diffusers": libraries.diffusers,
            "transformers": libraries.transformers,
        }
