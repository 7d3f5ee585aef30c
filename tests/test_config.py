import dataclasses

import pytest

import config
from errors import ConfigError
import paths


@pytest.fixture
def resolved(project, log) -> paths.ResolvedPaths:
    return paths.resolve_paths(log, scss_dir=str(project / 'scss'))


def test_defaults_for_production(resolved, log):
    run = config.build_run_config(resolved, log)

    assert run.scss_files == ('style.scss',)
    assert run.style == 'compressed'
    assert run.source_map is False
    assert run.dev is False


def test_defaults_for_development(resolved, log):
    run = config.build_run_config(resolved, log, dev=True)

    assert run.style == 'expanded'
    assert run.source_map is True


@pytest.mark.parametrize('source_map', [False, True])
def test_development_forces_source_map(resolved, log, source_map):
    run = config.build_run_config(resolved, log, source_map=source_map,
                                  dev=True)

    assert run.source_map is True


@pytest.mark.parametrize('style, expected', [
    ('compact', 'compact'),
    ('Compressed', 'compressed'),
    ('EXPANDED', 'expanded'),
    (' nested ', 'nested'),
])
def test_style_is_case_insensitive(resolved, log, style, expected):
    assert config.build_run_config(resolved, log, style=style).style == expected


@pytest.mark.parametrize('style', ['pretty', 'minified', 'compressedx'])
def test_invalid_style_is_rejected(resolved, log, style):
    with pytest.raises(ConfigError, match='is invalid'):
        config.build_run_config(resolved, log, style=style)


def test_source_files_must_exist(resolved, log, project):
    (project / 'scss' / 'print.scss').write_text('')

    run = config.build_run_config(resolved, log,
                                  scss_files='style.scss, print.scss,style.scss')
    assert run.scss_files == ('style.scss', 'print.scss')
    assert run.scss_paths == [project / 'scss' / 'style.scss',
                              project / 'scss' / 'print.scss']

    with pytest.raises(ConfigError, match='missing.scss'):
        config.build_run_config(resolved, log, scss_files='style.scss,missing.scss')


def test_missing_default_file(resolved, log, project):
    (project / 'scss' / 'style.scss').unlink()

    with pytest.raises(ConfigError, match='style.scss'):
        config.build_run_config(resolved, log)


def test_run_config_is_immutable(resolved, log):
    run = config.build_run_config(resolved, log)

    with pytest.raises(dataclasses.FrozenInstanceError):
        run.style = 'nested'


def test_patterns(resolved, log, project):
    run = config.build_run_config(resolved, log)

    assert run.css_pattern == str(project / 'css' / '*.css')
    assert run.watch_pattern == str(project / 'scss' / '**' / '*.scss')
    assert run.template_pattern is None


def test_summary_is_logged(resolved, log, stream):
    config.build_run_config(resolved, log, dev=True)

    output = stream.getvalue()
    assert '== SASS-CONFIG > ' in output
    assert 'Build For           : Development' in output
    assert 'Source Map          : Generate' in output
    assert 'CSS Style           : expanded' in output


def test_config_file(tmp_path):
    (tmp_path / config.CONFIG_FILE).write_text(
        'scss-dir: web/scss\n'
        'dev: true\n'
        'live_reload:\n'
        '  - web/js/*.js\n'
        '  - web/*.html\n'
    )

    conf = config.Config.from_path(tmp_path)

    assert conf['scss_dir'] == 'web/scss'
    assert conf['dev'] is True
    assert conf['live_reload'] == 'web/js/*.js,web/*.html'


def test_config_file_is_optional(tmp_path):
    assert len(config.Config.from_path(tmp_path)) == 0


def test_broken_config_file(tmp_path):
    (tmp_path / config.CONFIG_FILE).write_text('scss-dir: [unclosed\n')

    with pytest.raises(ConfigError, match='is broken'):
        config.Config.from_path(tmp_path)

    (tmp_path / config.CONFIG_FILE).write_text('- just\n- a list\n')

    with pytest.raises(ConfigError, match='mapping'):
        config.Config.from_path(tmp_path)


def test_null_values_become_empty(tmp_path):
    (tmp_path / config.CONFIG_FILE).write_text('theme: ~\nscss-dir:\n')

    conf = config.Config.from_path(tmp_path)

    assert conf['theme'] == ''
    assert conf['scss_dir'] == ''
