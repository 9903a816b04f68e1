import textwrap

import pytest
from junitparser import JUnitXml
from typer.testing import CliRunner

from unitrun.cli import app

runner = CliRunner()


@pytest.fixture
def write_script(tmp_path):
    def _write(content: str, name: str = "sample_test.py"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write


PASS_AND_FAIL = """\
    from unitrun import *

    def a():
        ASSERT(EQ(1, 1))
        END_TEST()

    def b():
        ASSERT(EQ(1, 2))
        END_TEST()

    TEST("a", a)
    TEST("b", b)
"""


def test_run_reports_summary_and_exits_zero(write_script):
    script = write_script(PASS_AND_FAIL)
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert "Test case 1: a passed" in result.output
    assert "2 test cases ran." in result.output
    assert "1 passed." in result.output
    assert "1 failed." in result.output


def test_run_strict_exits_one_on_failure(write_script):
    script = write_script(PASS_AND_FAIL)
    result = runner.invoke(app, ["run", "--strict", str(script)])
    assert result.exit_code == 1


def test_run_strict_exits_zero_when_all_pass(write_script):
    script = write_script("""\
        from unitrun import *

        @DEATH_TEST("dies")
        def dies():
            ASSERT(FALSE(True))
            END_TEST()
    """)
    result = runner.invoke(app, ["run", "--strict", str(script)])
    assert result.exit_code == 0
    assert "Death test case 1: dies passed" in result.output


def test_run_multiple_scripts_share_one_run(write_script):
    first = write_script(PASS_AND_FAIL, "first_test.py")
    second = write_script("""\
        from unitrun import *

        TEST("c", lambda: END_TEST())
    """, "second_test.py")
    result = runner.invoke(app, ["run", str(first), str(second)])
    assert result.exit_code == 0
    assert "Running test case 3: c . . ." in result.output
    assert "3 test cases ran." in result.output


def test_run_duplicate_name_is_fatal(write_script):
    script = write_script("""\
        from unitrun import *

        TEST("same", lambda: END_TEST())
        TEST("same", lambda: END_TEST())
    """)
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 2
    assert "Duplicate test case name: same" in result.output
    assert "SUMMARY" not in result.output


def test_run_script_that_raises_while_loading(write_script):
    script = write_script("raise RuntimeError('broken script')\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 2
    assert "RuntimeError: broken script" in result.output


def test_run_end_test_twice_exits_with_assert_code(write_script):
    script = write_script("""\
        from unitrun import *

        def twice():
            END_TEST()
            END_TEST()

        TEST("twice", twice)
    """)
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 3
    assert "more than once" in result.output


def test_run_script_calling_run_all_tests_runs_once(write_script):
    script = write_script(textwrap.dedent(PASS_AND_FAIL) + "\nRUN_ALL_TESTS()\n")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert result.output.count("SUMMARY") == 1


def test_run_missing_script():
    result = runner.invoke(app, ["run", "nonexistent_test.py"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_run_without_scripts():
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 1


def test_run_missing_config(write_script):
    script = write_script(PASS_AND_FAIL)
    result = runner.invoke(app, ["run", "--config", "nonexistent.yaml", str(script)])
    assert result.exit_code == 1


def test_run_invalid_config(tmp_path):
    config = tmp_path / "unitrun.yaml"
    config.write_text("bogus_key: 1\n")
    result = runner.invoke(app, ["run", "--config", str(config)])
    assert result.exit_code == 1
    assert "invalid config" in result.output


def test_run_tests_registered_after_script_run_all_tests(write_script):
    first = write_script("""\
        from unitrun import *

        TEST("a", lambda: END_TEST())
        RUN_ALL_TESTS()
    """, "first_test.py")
    second = write_script("""\
        from unitrun import *

        TEST("b", lambda: END_TEST())
    """, "second_test.py")
    result = runner.invoke(app, ["run", str(first), str(second)])
    assert result.exit_code == 0
    assert "Test case 2: b passed" in result.output
    final_summary = result.output.rsplit("SUMMARY", 1)[1]
    assert "2 test cases ran." in final_summary
    assert "2 passed." in final_summary


def test_run_invalid_test_name_is_fatal(write_script):
    script = write_script("""\
        from unitrun import *

        TEST("", lambda: END_TEST())
    """)
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 2
    assert "must be a non-empty string" in result.output
    assert "SUMMARY" not in result.output


def test_run_config_with_unset_env_var(tmp_path, monkeypatch):
    monkeypatch.delenv("UNITRUN_UNSET_VAR", raising=False)
    config = tmp_path / "unitrun.yaml"
    config.write_text("scripts:\n  - ${UNITRUN_UNSET_VAR}/a_test.py\n")
    result = runner.invoke(app, ["run", "--config", str(config)])
    assert result.exit_code == 1
    assert "invalid config" in result.output
    assert "missing environment variable" in result.output


def test_run_config_with_malformed_yaml(tmp_path):
    config = tmp_path / "unitrun.yaml"
    config.write_text("scripts: [a_test.py\n")
    result = runner.invoke(app, ["run", "--config", str(config)])
    assert result.exit_code == 1
    assert "invalid YAML" in result.output


def test_run_writes_junit_and_debug_log(write_script, tmp_path):
    script = write_script(PASS_AND_FAIL)
    junit = tmp_path / "out" / "junit.xml"
    debug_log = tmp_path / "out" / "debug.log"
    result = runner.invoke(
        app,
        ["run", str(script), "--junit", str(junit), "--debug-log", str(debug_log)],
    )
    assert result.exit_code == 0
    assert junit.exists()
    suite = next(iter(JUnitXml.fromfile(str(junit))))
    assert suite.tests == 2
    assert f"Loading test script {script}" in debug_log.read_text()


def test_init_then_run_with_config(tmp_path):
    project = tmp_path / "project"
    result = runner.invoke(app, ["init", "--dir", str(project)])
    assert result.exit_code == 0
    assert (project / "unitrun.yaml").exists()
    assert (project / "tests" / "example_test.py").exists()

    result = runner.invoke(app, ["run", "--config", str(project / "unitrun.yaml")])
    assert result.exit_code == 0
    assert "2 passed." in result.output
    assert (project / "out" / "junit.xml").exists()
    assert (project / "out" / "debug.log").exists()


def test_init_skips_existing_config(tmp_path):
    (tmp_path / "unitrun.yaml").write_text("scripts: []\n")
    result = runner.invoke(app, ["init", "--dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "skipping" in result.output
    assert (tmp_path / "unitrun.yaml").read_text() == "scripts: []\n"


def test_run_bundled_example():
    from pathlib import Path

    example = Path(__file__).resolve().parents[1] / "examples" / "predicates_test.py"
    result = runner.invoke(app, ["run", "--strict", str(example)])
    assert result.exit_code == 0
    assert "5 passed." in result.output
    assert result.output.count("SUMMARY") == 1
