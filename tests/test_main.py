import pytest

import config
import main


def test_defaults(tmp_path):
    args = main.parse_args([], tmp_path)

    assert args.command == 'default'
    assert args.dev is False
    assert args.scss_dir == ''
    assert main.COMMANDS[args.command] == ('sass', 'watch', 'livereload',
                                           'imagemin')


def test_short_flags(tmp_path):
    args = main.parse_args(['sass', '-BDVm', '-s', 'scss', '-c', 'css',
                            '-y', 'nested', '-e', 'a.scss,b.scss',
                            '-u', 'js', '-v', 'dist', '-w', 'app'], tmp_path)

    assert args.command == 'sass'
    assert args.beep and args.dev and args.verbose and args.source_map
    assert (args.scss_dir, args.css_dir) == ('scss', 'css')
    assert args.style == 'nested'
    assert args.scss_files == 'a.scss,b.scss'
    assert (args.uglify_source, args.uglify_dest, args.uglify_file) == \
        ('js', 'dist', 'app')


def test_unknown_command(tmp_path, capsys):
    with pytest.raises(SystemExit) as e:
        main.parse_args(['compile'], tmp_path)

    assert e.value.code == 2


def test_config_file_provides_defaults(tmp_path):
    (tmp_path / config.CONFIG_FILE).write_text(
        'scss-dir: web/scss\n'
        'dev: true\n'
        'imagemin: [images, files]\n'
        'command: usage\n'
        'unknown: ignored\n'
    )

    args = main.parse_args([], tmp_path)
    assert args.scss_dir == 'web/scss'
    assert args.dev is True
    assert args.imagemin == 'images,files'
    assert args.command == 'default'
    assert not hasattr(args, 'unknown')

    args = main.parse_args(['--scss-dir', 'other'], tmp_path)
    assert args.scss_dir == 'other'


def test_main_usage(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert main.main(['usage']) == 0

    output = capsys.readouterr().out
    assert 'sassdev v{}'.format(main.VERSION) in output
    assert 'Usage: sassdev [command] [options]' in output


def test_main_sass(project, monkeypatch, capsys):
    monkeypatch.chdir(project)

    assert main.main(['sass', '--scss-dir', 'scss']) == 0
    assert (project / 'css' / 'style.css').exists()


def test_main_exits_on_configuration_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as e:
        main.main(['sass'])

    assert e.value.code == 1
    assert 'Insufficient arguments' in capsys.readouterr().out


def test_main_broken_config_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / config.CONFIG_FILE).write_text('dev: [\n')

    with pytest.raises(SystemExit) as e:
        main.main(['usage'])

    assert e.value.code == 1


def test_main_empty_theme_in_config_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / config.CONFIG_FILE).write_text(
        'drupal-root: {}\ntheme: ~\n'.format(tmp_path),
    )

    with pytest.raises(SystemExit) as e:
        main.main(['sass'])

    assert e.value.code == 1
    assert 'no theme name' in capsys.readouterr().out
