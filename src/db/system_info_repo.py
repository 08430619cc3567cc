from __future__ import annotations

from db.derived_table_repo import DerivedTableRepo
from db.poco.system_info import SystemInfo


class SystemInfoRepo(DerivedTableRepo[SystemInfo]):
    model = SystemInfo
