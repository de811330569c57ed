from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from junitparser import Failure, JUnitXml, TestCase, TestSuite

if TYPE_CHECKING:
    from tapline.model import Plan, Test


def write_junit(path: Path, tests: list[Test], plan: Plan | None = None) -> Path:
    """Write a JUnit XML file with one suite per TAP test, return path."""
    xml = JUnitXml()

    for test in tests:
        suite = TestSuite(test.name)

        if plan is not None:
            suite.add_property("plan_start", str(plan.start))
            suite.add_property("plan_end", str(plan.end))

        # Test cases: one per assertion
        for assertion in test.assertions:
            case = TestCase(assertion.message)
            case.classname = test.name
            if not assertion.passed:
                case.result = [Failure(assertion.message)]
                if test.log:
                    case.system_out = test.log_text
            suite.add_testcase(case)

        # Use append (not +=) to preserve properties
        xml.append(suite)

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
