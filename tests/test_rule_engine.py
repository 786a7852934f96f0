"""
Tests for the Rule Engine — verify each checkfile rule fires correctly.
"""

import pytest

from modgate.core.checkfile import parse_checkfile
from modgate.core.errors import CheckfileSchemaError, ModuleFactError
from modgate.core.rule_engine import RULE_REGISTRY, RuleEngine, validate
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Classification

DEFAULTS = RiskThresholds()


def run(document, module):
    return validate(parse_checkfile(document), module, DEFAULTS)


# --- allow_wasi ---


def test_wasi_import_with_allow_wasi_false(make_module):
    module = make_module(imports=[("wasi_snapshot_preview1", "fd_write", ["i32"], ["i32"])])
    report = run("validate:\n  allow_wasi: false\n", module)

    assert list(report.fails) == ["allow_wasi"]
    fail = report.fails["allow_wasi"]
    assert fail.severity == 10
    assert fail.classification is Classification.ABI_COMPATIBILITY
    assert fail.expected == "false"
    assert fail.actual == "true"


def test_allow_wasi_false_without_wasi_passes(plain_module):
    report = run("validate:\n  allow_wasi: false\n", plain_module)
    assert not report.has_failures()


def test_allow_wasi_true_with_wasi_passes(sample_module):
    report = run("validate:\n  allow_wasi: true\n", sample_module)
    assert not report.has_failures()


# --- imports ---


def test_imports_include_is_a_whitelist(make_module):
    module = make_module(imports=[("env", "a", [], []), ("env", "b", [], [])])
    report = run("validate:\n  imports:\n    include: [a]\n", module)

    assert list(report.fails) == ["imports.include.env::b"]
    fail = report.fails["imports.include.env::b"]
    assert fail.severity == 8
    assert fail.classification is Classification.ABI_COMPATIBILITY


def test_imports_include_declared_but_unused_is_fine(make_module):
    module = make_module(imports=[("env", "a", [], [])])
    report = run("validate:\n  imports:\n    include: [a, never_called]\n", module)
    assert not report.has_failures()


def test_imports_include_namespace_must_match(make_module):
    module = make_module(imports=[("env", "abort", [], [])])
    report = run(
        "validate:\n  imports:\n    include:\n      - name: abort\n        namespace: other\n",
        module,
    )
    assert list(report.fails) == ["imports.include.env::abort"]


def test_imports_include_signature_mismatch(make_module):
    module = make_module(imports=[("env", "abort", ["i32", "i32"], [])])
    report = run(
        "validate:\n"
        "  imports:\n"
        "    include:\n"
        "      - name: abort\n"
        "        namespace: env\n"
        "        params: [i32]\n"
        "        results: [i32]\n",
        module,
    )

    assert list(report.fails) == [
        "imports.include.env::abort.params",
        "imports.include.env::abort.results",
    ]
    params = report.fails["imports.include.env::abort.params"]
    assert params.expected == "[i32]"
    assert params.actual == "[i32, i32]"
    assert params.severity == 8
    assert report.fails["imports.include.env::abort.results"].actual == "[]"


def test_imports_include_only_declared_sides_are_checked(make_module):
    module = make_module(imports=[("env", "abort", ["i32"], ["i64"])])
    report = run(
        "validate:\n  imports:\n    include:\n      - name: abort\n        params: [i32]\n",
        module,
    )
    assert not report.has_failures()


def test_imports_exclude_present(sample_module):
    report = run("validate:\n  imports:\n    exclude: [abort, not_imported]\n", sample_module)

    assert list(report.fails) == ["imports.exclude.abort"]
    fail = report.fails["imports.exclude.abort"]
    assert fail.severity == 5
    assert fail.expected == "excluded"
    assert fail.actual == "included"


def test_imports_exclude_scoped_to_namespace(sample_module):
    report = run(
        "validate:\n  imports:\n    exclude:\n      - name: abort\n        namespace: other\n",
        sample_module,
    )
    assert not report.has_failures()


def test_namespace_include_missing(sample_module):
    report = run(
        "validate:\n  imports:\n    namespace:\n      include: [env, missing_ns]\n",
        sample_module,
    )
    assert list(report.fails) == ["imports.namespace.include.missing_ns"]
    assert report.fails["imports.namespace.include.missing_ns"].severity == 8


def test_namespace_include_functions(sample_module):
    report = run(
        "validate:\n"
        "  imports:\n"
        "    namespace:\n"
        "      include:\n"
        "        - name: env\n"
        "          functions:\n"
        "            - log\n"
        "            - missing_fn\n"
        "            - name: abort\n"
        "              params: [i32]\n",
        sample_module,
    )
    assert list(report.fails) == [
        "imports.namespace.include.env::abort.params",
        "imports.namespace.include.env::missing_fn",
    ]
    assert report.fails["imports.namespace.include.env::missing_fn"].severity == 8


def test_namespace_exclude_present(sample_module):
    report = run(
        "validate:\n  imports:\n    namespace:\n      exclude: [wasi_snapshot_preview1, absent]\n",
        sample_module,
    )
    assert list(report.fails) == ["imports.namespace.exclude.wasi_snapshot_preview1"]
    fail = report.fails["imports.namespace.exclude.wasi_snapshot_preview1"]
    assert fail.severity == 10
    assert fail.classification is Classification.ABI_COMPATIBILITY


def test_namespace_exclude_functions(sample_module):
    report = run(
        "validate:\n"
        "  imports:\n"
        "    namespace:\n"
        "      exclude:\n"
        "        - name: env\n"
        "          functions: [abort, absent]\n",
        sample_module,
    )
    assert list(report.fails) == [
        "imports.namespace.exclude.env",
        "imports.namespace.exclude.env::abort",
    ]


# --- exports ---


def test_exports_include_is_a_required_set(make_module):
    module = make_module(exports=[("a", [], []), ("b", [], [])])
    report = run("validate:\n  exports:\n    include: [a, c]\n", module)

    assert list(report.fails) == ["exports.include.c"]
    fail = report.fails["exports.include.c"]
    assert fail.severity == 10
    assert fail.expected == "included"
    assert fail.actual == "excluded"


def test_exports_include_signature(sample_module):
    report = run(
        "validate:\n"
        "  exports:\n"
        "    include:\n"
        "      - name: alloc\n"
        "        params: [i64]\n"
        "        results: [i32]\n",
        sample_module,
    )
    assert list(report.fails) == ["exports.include.alloc.params"]


def test_exports_exclude_present(sample_module):
    report = run("validate:\n  exports:\n    exclude: [_start, main]\n", sample_module)

    assert list(report.fails) == ["exports.exclude._start"]
    assert report.fails["exports.exclude._start"].severity == 5


@pytest.mark.parametrize(
    "count, limit, expected_severity",
    [(2, 1, 10), (3, 2, 5), (5, 4, 3), (11, 10, 1), (40, 2, 10)],
)
def test_exports_max(make_module, count, limit, expected_severity):
    module = make_module(exports=[(f"f{i}", [], []) for i in range(count)])
    report = run(f"validate:\n  exports:\n    max: {limit}\n", module)

    fail = report.fails["exports.max"]
    assert fail.expected == f"<= {limit}"
    assert fail.actual == str(count)
    assert fail.severity == expected_severity
    assert fail.classification is Classification.SECURITY


def test_exports_max_at_limit_passes(make_module):
    module = make_module(exports=[("a", [], []), ("b", [], [])])
    assert not run("validate:\n  exports:\n    max: 2\n", module).has_failures()


def test_exports_max_counts_distinct_names(make_module):
    module = make_module(exports=[("a", [], []), ("a", [], []), ("b", [], [])])
    assert not run("validate:\n  exports:\n    max: 2\n", module).has_failures()


def test_exports_max_zero(make_module):
    module = make_module(exports=[("a", [], [])])
    report = run("validate:\n  exports:\n    max: 0\n", module)
    assert report.fails["exports.max"].severity == 10


def test_exports_max_severity_is_monotonic(make_module):
    severities = []
    for count in range(4, 30):
        module = make_module(exports=[(f"f{i}", [], []) for i in range(count)])
        report = run("validate:\n  exports:\n    max: 3\n", module)
        severities.append(report.fails["exports.max"].severity)
    assert severities == sorted(severities)


# --- size ---


def test_size_max_exceeded(make_module):
    module = make_module(size=2_000_000)
    report = run("validate:\n  size:\n    max: 1MB\n", module)

    fail = report.fails["size.max"]
    assert fail.classification is Classification.RESOURCE_LIMIT
    assert fail.severity == 1
    assert fail.expected == "<= 1MB"
    assert fail.actual == "1.91 MiB"


def test_size_max_within_limit(make_module):
    module = make_module(size=1_048_576)
    assert not run("validate:\n  size:\n    max: 1 MiB\n", module).has_failures()


def test_size_severity_is_clamped(make_module):
    module = make_module(size=50 * 1024 * 1024)
    report = run("validate:\n  size:\n    max: 1 MiB\n", module)
    assert report.fails["size.max"].severity == 10


def test_malformed_size_is_fatal(sample_module):
    with pytest.raises(CheckfileSchemaError):
        run("validate:\n  allow_wasi: false\n  size:\n    max: lots\n", sample_module)


# --- complexity ---


def test_complexity_within_risk(sample_module):
    assert not run("validate:\n  complexity:\n    max_risk: low\n", sample_module).has_failures()


@pytest.mark.parametrize(
    "score, expected_actual, expected_severity",
    [(3000, "medium", 1), (7600, "medium", 3), (60_000, "high", 10)],
)
def test_complexity_exceeds_risk(make_module, score, expected_actual, expected_severity):
    module = make_module(complexity=score)
    report = run("validate:\n  complexity:\n    max_risk: low\n", module)

    fail = report.fails["complexity.max_risk"]
    assert fail.expected == "<= low"
    assert fail.actual == expected_actual
    assert fail.severity == expected_severity
    assert fail.classification is Classification.RESOURCE_LIMIT


def test_complexity_uses_given_thresholds(make_module):
    module = make_module(complexity=3000)
    validation = parse_checkfile("validate:\n  complexity:\n    max_risk: low\n")
    report = validate(validation, module, RiskThresholds(low=5000, medium=10_000))
    assert not report.has_failures()


@pytest.mark.parametrize(
    "body",
    [
        "  complexity:\n    max_score: 100\n",
        "  complexity:\n    max_risk: low\n    max_score: 100\n",
        "  complexity: {}\n",
    ],
)
def test_unsupported_complexity_rules_are_fatal(sample_module, body):
    with pytest.raises(CheckfileSchemaError):
        run("validate:\n" + body, sample_module)


def test_complexity_without_module_score_is_fatal(plain_module):
    with pytest.raises(ModuleFactError, match="remove the complexity parameter"):
        run("validate:\n  complexity:\n    max_risk: high\n", plain_module)


# --- engine ---


def test_all_rule_groups_registered():
    assert list(RULE_REGISTRY) == ["allow_wasi", "imports", "exports", "size", "complexity"]


def test_all_groups_run_and_report_is_sorted(sample_module):
    report = run(
        "validate:\n"
        "  allow_wasi: false\n"
        "  imports:\n"
        "    include: [abort]\n"
        "  exports:\n"
        "    include: [missing]\n"
        "    max: 1\n"
        "  size:\n"
        "    max: 1 KiB\n",
        sample_module,
    )

    assert list(report.fails) == sorted(report.fails)
    assert set(report.fails) == {
        "allow_wasi",
        "exports.include.missing",
        "exports.max",
        "imports.include.env::log",
        "imports.include.wasi_snapshot_preview1::fd_write",
        "size.max",
    }
    assert report.exit_code == 1
    assert report.max_severity == 10


def test_identical_inputs_give_identical_reports(sample_module):
    document = "validate:\n  imports:\n    include: [log]\n  exports:\n    max: 1\n"
    first = run(document, sample_module)
    second = run(document, sample_module)
    assert first.model_dump() == second.model_dump()


def test_empty_checkfile_passes(sample_module):
    report = RuleEngine().run(parse_checkfile("validate: {}\n"), sample_module, DEFAULTS)
    assert not report.has_failures()
    assert report.exit_code == 0


def test_engine_accepts_check_body(sample_module):
    check = parse_checkfile("validate:\n  allow_wasi: false\n").check
    assert list(validate(check, sample_module, DEFAULTS).fails) == ["allow_wasi"]
