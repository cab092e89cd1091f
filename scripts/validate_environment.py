#!/usr/bin/env python3
"""Validate local room inventory environment readiness."""

from __future__ import annotations

import importlib
import sys
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.models import RoomType
from backend.repository.room_repository import SAMPLE_ROOMS, RoomRepository
from backend.services.room_service import RoomService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = ["fastapi", "uvicorn", "pydantic", "httpx", "pytest"]
    import_errors: list[str] = []
    for module_name in package_specs:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3: Settings load from environment
    try:
        settings = replace(get_settings(), seed_sample_rooms=True)
        ok, line = _print_result(
            "Settings",
            True,
            f": port={settings.port} rate_limit={settings.rate_limit_max_requests}"
            f"/{settings.rate_limit_window_seconds}s",
        )
    except ValueError as exc:
        settings = None
        ok, line = _print_result("Settings", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    if settings is not None:
        service = RoomService(repository=RoomRepository(), settings=settings)

        # CHECK 4: Sample room seeding
        seeded = service.initialize()
        ok, line = _print_result(
            f"Sample rooms: {seeded} seeded",
            seeded == len(SAMPLE_ROOMS),
            "" if seeded == len(SAMPLE_ROOMS) else f"expected {len(SAMPLE_ROOMS)}",
        )
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5: Statistics consistency
        stats = service.get_room_statistics()
        per_type_total = sum(item.total for item in stats.by_type.values())
        consistent = (
            stats.total == stats.available + stats.occupied == per_type_total
            and set(stats.by_type) == set(RoomType)
        )
        ok, line = _print_result(
            "Room statistics",
            consistent,
            f": total={stats.total}" if consistent else "per-type totals do not add up",
        )
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Room Inventory Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
