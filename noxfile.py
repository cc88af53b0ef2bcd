import nox

nox.needs_version = ">=2024.4.15"
nox.options.default_venv_backend = "uv|virtualenv"


@nox.session(python=["3.10", "3.11", "3.12", "3.13"])
def tests(session: nox.Session) -> None:
    session.install("-e.[test]")
    session.run("pytest", "--cov", "formbind", "--cov-report", "term-missing", "tests", *session.posargs)


@nox.session
@nox.parametrize("editable", [True, False])
def install(session: nox.Session, editable: bool) -> None:
    session.install("-e." if editable else ".")
    out = session.run(
        "python",
        "-c",
        "import formbind; print(formbind.bind([('a', '1')], formbind.SchemaBuilder().required('a').build()))",
        silent=True,
    )
    assert "{'a': '1'}" in out
