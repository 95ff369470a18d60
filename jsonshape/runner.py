"""Runner that loads a YAML/JSON suite file and executes its cases."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .exceptions import ConfigError, SuiteFileError
from .models import ShapeConfig
from .suite import ShapeCase, SuiteReport, SuiteRunner, load_document


class ShapeRunner:
    """
    Runs the shape cases declared in a suite file.

    Suite layout:

        config:
          ignore_additional_props: true
        cases:
          - name: user payload
            actual_file: responses/user.json
            expected: {"id": 1, "name": "x"}
        datasets: datasets/

    Usage:
        runner = ShapeRunner("shapes.yaml")
        report = runner.run()

    Or as a one-liner:
        report = ShapeRunner.run_suite("shapes.yaml")
    """

    def __init__(self, suite_path: str, config: Optional[ShapeConfig] = None):
        """
        Initialize the runner.

        Args:
            suite_path: Path to the YAML/JSON suite file
            config: Overrides the suite's own `config` block when given
        """
        self.suite_path = Path(suite_path)
        self._config = config
        self._suite: Optional[dict] = None

    @property
    def suite(self) -> dict:
        """Load and cache the suite from file."""
        if self._suite is None:
            self._suite = self._load_suite()
        return self._suite

    @property
    def config(self) -> ShapeConfig:
        if self._config is None:
            self._config = ShapeConfig.from_dict(self.suite.get('config'))
        return self._config

    @property
    def base_dir(self) -> Path:
        return self.suite_path.parent

    def _load_suite(self) -> dict:
        suite = load_document(self.suite_path)
        if suite is None:
            suite = {}
        if not isinstance(suite, dict):
            raise SuiteFileError(str(self.suite_path), "suite must be a mapping")
        return suite

    def load_cases(self) -> list[ShapeCase]:
        """Build the inline cases of the suite."""
        cases = self.suite.get('cases') or []
        if not isinstance(cases, list):
            raise ConfigError('cases', "expected a list of case mappings")
        return [
            ShapeCase.from_dict(data, self.base_dir, default_name=f"case-{i + 1}")
            for i, data in enumerate(cases)
        ]

    def run(self, print_report: bool = True) -> SuiteReport:
        """
        Run inline cases, then the dataset folder if one is declared.

        Args:
            print_report: Whether to print the summary report

        Returns:
            SuiteReport with all results
        """
        runner = SuiteRunner(self.config)
        report = runner.run_cases(self.load_cases())

        datasets = self.suite.get('datasets')
        if datasets:
            folder = self.base_dir / datasets
            if not folder.is_dir():
                raise SuiteFileError(str(folder), "datasets folder not found")
            runner.run_folder(folder, report)

        if print_report:
            for case in report.cases:
                print(f"{'PASS' if case.passed else 'FAIL'}: {case.name}")
            report.print_summary()

        return report

    @classmethod
    def run_suite(
        cls,
        suite_path: str,
        print_report: bool = True,
        config: Optional[ShapeConfig] = None
    ) -> SuiteReport:
        """Convenience class method to run a suite in one call."""
        runner = cls(suite_path, config)
        return runner.run(print_report=print_report)


def run_suite(suite_path: str, print_report: bool = True) -> SuiteReport:
    """
    Run the shape suite at the given path.

        from jsonshape.runner import run_suite
        report = run_suite("shapes.yaml")
    """
    return ShapeRunner.run_suite(suite_path, print_report)
