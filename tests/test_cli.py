import shutil
import subprocess
from unittest import mock

import pytest

from stagecc.cli import main, parse_args
from stagecc.compiler import PipelineStage

RETURN_TWO = "int main(void) { return 2; }\n"


def _fake_gcc(link_code=0):
    def run(cmd, *args, **kwargs):
        if "-E" in cmd:
            shutil.copyfile(cmd[3], cmd[5])
            return subprocess.CompletedProcess(cmd, 0)
        return subprocess.CompletedProcess(cmd, link_code)

    return run


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "prog.c"
    path.write_text(RETURN_TWO)
    return path


@pytest.mark.parametrize(
    "flag, stage",
    [
        ("--lex", PipelineStage.LEXER),
        ("--parse", PipelineStage.PARSER),
        ("--tacky", PipelineStage.TAC_GENERATION),
        ("--codegen", PipelineStage.ASSEMBLY_GENERATION),
        ("--allocation", PipelineStage.ASSEMBLY_ALLOCATION),
        ("--legalization", PipelineStage.ASSEMBLY_LEGALIZATION),
    ],
)
def test_parse_args_stage_flags(flag, stage):
    options = parse_args([flag, "a.c"])
    assert options.stage is stage
    assert options.emit_assembly_only is False
    assert str(options.input_file) == "a.c"


def test_parse_args_assembly_only():
    options = parse_args(["-S", "a.c"])
    assert options.stage is PipelineStage.CODE_EMISSION
    assert options.emit_assembly_only is True


def test_parse_args_default_is_full_build():
    options = parse_args(["a.c"])
    assert options.stage is PipelineStage.CODE_EMISSION
    assert options.emit_assembly_only is False


def test_parse_args_errors():
    with pytest.raises(ValueError, match="Usage"):
        parse_args([])
    with pytest.raises(ValueError, match="Unknown option: --bogus"):
        parse_args(["--bogus", "a.c"])
    with pytest.raises(ValueError, match="Expected single input file"):
        parse_args(["a.c", "b.c"])
    with pytest.raises(ValueError, match="Expected single input file"):
        parse_args(["a.c", "--lex"])


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope.c"
    assert main([str(missing)]) == 1
    assert "Input file does not exist" in capsys.readouterr().err


def test_main_lex_stage_prints_tokens(source, capsys):
    with mock.patch("stagecc.compiler.subprocess.run", side_effect=_fake_gcc()):
        assert main(["--lex", str(source)]) == 0
    assert "'main'" in capsys.readouterr().out
    assert not source.with_suffix(".i").exists()


def test_main_assembly_only_writes_file(source):
    with mock.patch("stagecc.compiler.subprocess.run", side_effect=_fake_gcc()):
        assert main(["-S", str(source)]) == 0
    asm = source.with_suffix(".s").read_text()
    assert asm.startswith(".globl main\n")
    assert "movl $2, %eax" in asm


def test_main_full_build_links_and_cleans_up(source):
    with mock.patch(
        "stagecc.compiler.subprocess.run", side_effect=_fake_gcc()
    ) as run:
        assert main([str(source)]) == 0
    assert run.call_args.args[0] == [
        "gcc", str(source.with_suffix(".s")), "-o", str(source.with_suffix(""))
    ]
    assert not source.with_suffix(".s").exists()
    assert not source.with_suffix(".i").exists()


def test_main_link_failure(source, capsys):
    with mock.patch("stagecc.compiler.subprocess.run", side_effect=_fake_gcc(1)):
        assert main([str(source)]) == 1
    assert "Assembly/linking failed" in capsys.readouterr().err


def test_main_parser_error_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.c"
    bad.write_text("int main(void) { return ; }\n")
    with mock.patch("stagecc.compiler.subprocess.run", side_effect=_fake_gcc()):
        assert main([str(bad)]) == 2
    assert "error" in capsys.readouterr().err
    assert not bad.with_suffix(".i").exists()


def test_main_lexer_error_exit_code(tmp_path):
    bad = tmp_path / "bad.c"
    bad.write_text("int main(void) { return @; }\n")
    with mock.patch("stagecc.compiler.subprocess.run", side_effect=_fake_gcc()):
        assert main([str(bad)]) == 1


def test_main_preprocess_failure(source, capsys):
    def failing(cmd, *args, **kwargs):
        return subprocess.CompletedProcess(cmd, 1)

    with mock.patch("stagecc.compiler.subprocess.run", side_effect=failing):
        assert main([str(source)]) == 1
    assert "Preprocessing failed" in capsys.readouterr().err