from __future__ import annotations

from db.derived_table_repo import DerivedTableRepo
from db.poco.libraries import Libraries


class LibrariesRepo(DerivedTableRepo[Libraries]):
    model = Libraries
