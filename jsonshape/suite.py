"""Shape-test suite execution and reporting."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from .engine import ShapeEngine
from .exceptions import ConfigError, InvalidArgumentError, JsonShapeError, SuiteFileError
from .jsonpath_utils import JSONPathMatcher
from .models import ComparisonMode, JsonDocument, ShapeConfig

logger = logging.getLogger(__name__)


def load_document(path: str | Path) -> Any:
    """
    Load a JSON or YAML document from disk.

    Files ending in .yaml/.yml are read with PyYAML, everything else as JSON.
    """
    path = Path(path)
    if not path.exists():
        raise SuiteFileError(str(path), "file not found")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SuiteFileError(str(path), str(e))

    try:
        if path.suffix.lower() in ('.yaml', '.yml'):
            return yaml.safe_load(content)
        return json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SuiteFileError(str(path), str(e))


def _as_document(value: Any) -> Any:
    # a null root stays distinguishable from a missing document
    return JsonDocument(None) if value is None else value


def _resolve_document(data: dict, side: str, base_dir: Path) -> Any:
    """Inline `<side>` value or the document referenced by `<side>_file`."""
    if side in data:
        return _as_document(data[side])
    file_key = f"{side}_file"
    if file_key in data:
        return _as_document(load_document(base_dir / data[file_key]))
    raise InvalidArgumentError(
        f"case defines neither '{side}' nor '{file_key}'",
        {"side": side}
    )


@dataclass
class ShapeCase:
    """A single shape comparison to run."""
    name: str
    actual: Any
    expected: Any
    mode: ComparisonMode = ComparisonMode.SAME
    expect_match: bool = True
    ignore_additional_props: Optional[bool] = None
    actual_path: Optional[str] = None
    expected_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, base_dir: Path, default_name: str = "case") -> ShapeCase:
        """
        Build a case from its suite definition.

        Args:
            data: Case mapping (see SuiteRunner for the keys)
            base_dir: Directory that *_file references are relative to
            default_name: Name used when the case has none
        """
        if not isinstance(data, dict):
            raise ConfigError(default_name, "case definition must be a mapping")

        try:
            mode = ComparisonMode(data.get('mode', ComparisonMode.SAME.value))
        except ValueError:
            raise ConfigError('mode', f"unknown mode {data.get('mode')!r}")

        for key in ('actual_path', 'expected_path'):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ConfigError(key, "must be a JSONPath string")

        return cls(
            name=str(data.get('name', default_name)),
            actual=_resolve_document(data, 'actual', base_dir),
            expected=_resolve_document(data, 'expected', base_dir),
            mode=mode,
            expect_match=bool(data.get('expect_match', True)),
            ignore_additional_props=data.get('ignore_additional_props'),
            actual_path=data.get('actual_path'),
            expected_path=data.get('expected_path'),
        )


@dataclass
class CaseResult:
    """Result of a single shape case."""
    name: str
    passed: bool
    mode: ComparisonMode
    expect_match: bool = True
    matched: Optional[bool] = None
    comparison: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "passed": self.passed,
            "mode": self.mode.value,
            "expect_match": self.expect_match,
            "matched": self.matched,
        }
        if self.comparison:
            result["comparison"] = self.comparison
        if self.error:
            result["error"] = self.error
        return result


def _error_result(case: ShapeCase, error: Exception) -> CaseResult:
    return CaseResult(
        name=case.name,
        passed=False,
        mode=case.mode,
        expect_match=case.expect_match,
        error=str(error) or type(error).__name__,
    )



def _select(document: Any, path: Optional[str]) -> Any:
    """Apply a case's JSONPath selection, keeping null roots wrapped."""
    if not path:
        return document
    if isinstance(document, JsonDocument):
        document = document.root
    return _as_document(JSONPathMatcher.select(document, path))

@dataclass
class SuiteReport:
    """Report across all cases of a suite."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    cases: list[CaseResult] = field(default_factory=list)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.breakdown:
            self.breakdown = {
                "matched": [],
                "mismatched": [],
                "errors": [],
            }

    @property
    def pass_rate(self) -> str:
        return f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"

    def add(self, result: CaseResult):
        self.cases.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

        if result.error:
            self.breakdown["errors"].append(result.name)
        elif result.matched:
            self.breakdown["matched"].append(result.name)
        else:
            self.breakdown["mismatched"].append(result.name)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_cases": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": self.pass_rate,
            },
            "breakdown": self.breakdown,
            "cases": [c.to_dict() for c in self.cases],
        }

    def print_summary(self):
        print(f"\nShape Results: {self.passed}/{self.total} passed ({self.pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")

        if self.breakdown.get("matched"):
            print(f"  Matched: {len(self.breakdown['matched'])} cases")
        if self.breakdown.get("mismatched"):
            print(f"  Mismatched: {len(self.breakdown['mismatched'])} cases")
        if self.breakdown.get("errors"):
            print(f"  Errors: {len(self.breakdown['errors'])} cases")


class SuiteRunner:
    """
    Runs shape cases against one engine.

    Case keys:
    - name: display name
    - actual / actual_file, expected / expected_file: the documents
    - actual_path / expected_path: JSONPath selecting the compared part
    - mode: "same" (default) or "contains"
    - ignore_additional_props: contains-mode placeholder filtering
    - expect_match: expected verdict (default true)
    """

    def __init__(self, config: Optional[ShapeConfig] = None):
        self.config = config or ShapeConfig()
        self.engine = ShapeEngine(self.config)

    def run_case(self, case: ShapeCase) -> CaseResult:
        """Run a single case. Errors are reported as a failed result."""
        try:
            actual = _select(case.actual, case.actual_path)
            expected = _select(case.expected, case.expected_path)
            result = self.engine.compare(
                actual,
                expected,
                mode=case.mode,
                ignore_additional_props=case.ignore_additional_props
            )
        except JsonShapeError as e:
            logger.warning("Case %s errored: %s", case.name, e)
            return _error_result(case, e)
        except Exception as e:
            logger.exception("Case %s failed unexpectedly", case.name)
            return _error_result(case, e)

        passed = result.matched == case.expect_match
        logger.info("%s: %s", "PASS" if passed else "FAIL", case.name)
        return CaseResult(
            name=case.name,
            passed=passed,
            mode=case.mode,
            expect_match=case.expect_match,
            matched=result.matched,
            comparison=result.to_dict(),
        )

    def run_cases(self, cases: list[ShapeCase], report: Optional[SuiteReport] = None) -> SuiteReport:
        """Run a list of cases into a (new or given) report."""
        report = report or SuiteReport()
        for case in cases:
            report.add(self.run_case(case))
        return report

    def run_folder(self, folder: str | Path, report: Optional[SuiteReport] = None) -> SuiteReport:
        """Run every *.json / *.yaml case file in a folder, in name order."""
        report = report or SuiteReport()
        folder_path = Path(folder)

        files = sorted(
            p for p in folder_path.iterdir()
            if p.suffix.lower() in ('.json', '.yaml', '.yml')
        )
        for case_file in files:
            try:
                data = load_document(case_file)
                case = ShapeCase.from_dict(data, case_file.parent, default_name=case_file.stem)
            except Exception as e:
                logger.warning("Cannot load case %s: %s", case_file.name, e)
                report.add(CaseResult(
                    name=case_file.stem,
                    passed=False,
                    mode=ComparisonMode.SAME,
                    error=str(e),
                ))
                continue
            report.add(self.run_case(case))

        return report
