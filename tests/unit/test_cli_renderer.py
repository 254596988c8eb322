from trellis.cli.rendering import CliRenderer


def test_warnings_and_errors_go_to_stderr(capsys):
    renderer = CliRenderer()

    renderer.render("all good", "success")
    renderer.render("careful", "warning")
    renderer.render("broken", "error")

    captured = capsys.readouterr()
    assert captured.out == "all good\n"
    assert captured.err == "careful\nbroken\n"


def test_debug_only_when_verbose(capsys):
    CliRenderer().render("hidden", "debug")
    CliRenderer(verbose=True).render("shown", "debug")

    assert capsys.readouterr().out == "shown\n"
