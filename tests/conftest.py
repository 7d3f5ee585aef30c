import io
import pathlib
import shutil
import typing

import pytest

import context
import logger
import main


@pytest.fixture(autouse=True)
def no_external_commands(monkeypatch):
    """ keep npx and notification commands out of the tests """

    monkeypatch.setattr(shutil, 'which', lambda name, *args, **kwds: None)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log(stream) -> logger.Log:
    return logger.Log(prefix='test', verbose=True, stream=stream)


@pytest.fixture
def make_context(tmp_path, log) -> typing.Callable[..., context.Context]:
    def make(*argv: str) -> context.Context:
        return context.Context(main.parse_args(list(argv), tmp_path),
                               log,
                               tmp_path)
    return make


@pytest.fixture
def project(tmp_path) -> pathlib.Path:
    """ plain project with scss and css side by side """

    root = tmp_path / 'proj'
    (root / 'scss').mkdir(parents=True)
    (root / 'css').mkdir()
    (root / 'scss' / 'style.scss').write_text(
        '$main: #336699;\n.page { .title { color: $main; } }\n',
    )
    return root
