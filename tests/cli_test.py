import sys
import os
import json
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from click.testing import CliRunner
from main import cli

TOKENS = {'colors': {'blue': '#3b82f6'}, 'spacing': {'2': '0.5rem'}}


def _project(tmp_path, config=None):
    tokens_path = tmp_path / 'tokens.json'
    tokens_path.write_text(json.dumps(TOKENS), encoding='utf-8')
    config_path = tmp_path / 'miniwing.config.json'
    if config is not None:
        config_path.write_text(json.dumps(config), encoding='utf-8')
    page = tmp_path / 'index.html'
    page.write_text('<div class="bg-blue p-2 card flex"><p class="p-2">hi</p></div>', encoding='utf-8')
    return tokens_path, config_path, page


def test_build_writes_stylesheet(tmp_path):
    tokens_path, config_path, page = _project(tmp_path)
    output = tmp_path / 'out' / 'styles.css'
    result = CliRunner().invoke(cli, [
        'build', str(page),
        '--tokens', str(tokens_path),
        '--config', str(config_path),
        '--output', str(output),
    ])
    assert result.exit_code == 0, result.output
    css = output.read_text(encoding='utf-8')
    assert css.startswith('/* Miniwing Generated CSS */')
    assert css.endswith(
        '.bg-blue { background-color: #3b82f6; }\n'
        '.p-2 { padding: 0.5rem; }\n'
        '.flex { display: flex; }\n'
    )
    assert 'Found 4 unique class names' in result.output
    assert '3 rule(s) emitted, 1 class name(s) skipped' in result.output
    assert 'Tokens loaded (tokens: loaded, config: absent)' in result.output


def test_build_copies_output(tmp_path):
    tokens_path, config_path, page = _project(tmp_path)
    output = tmp_path / 'dist' / 'output.css'
    copy = tmp_path / 'playground' / 'output.css'
    result = CliRunner().invoke(cli, [
        'build', str(page), '--tokens', str(tokens_path), '--config', str(config_path),
        '-o', str(output), '--copy-to', str(copy),
    ])
    assert result.exit_code == 0, result.output
    assert copy.read_text(encoding='utf-8') == output.read_text(encoding='utf-8')


def test_build_uses_config_settings(tmp_path):
    output = tmp_path / 'from-config.css'
    tokens_path, config_path, page = _project(tmp_path, config={
        'output': {'path': str(output), 'comments': False},
        'scan': [str(tmp_path / 'index.html')],
        'colors': {'blue': '#0000ff'},
        'utilities': {'display': False},
    })
    result = CliRunner().invoke(cli, ['build', '--tokens', str(tokens_path), '--config', str(config_path)])
    assert result.exit_code == 0, result.output
    assert output.read_text(encoding='utf-8') == (
        '.bg-blue { background-color: #0000ff; }\n'
        '.p-2 { padding: 0.5rem; }\n'
    )
    assert 'Tokens override-merged (tokens: loaded, config: loaded)' in result.output


def test_build_src_dir_and_filter(tmp_path):
    tokens_path, config_path, _ = _project(tmp_path)
    output = tmp_path / 'out.css'
    result = CliRunner().invoke(cli, [
        'build', '--src-dir', str(tmp_path), '--filter',
        '--tokens', str(tokens_path), '--config', str(config_path), '-o', str(output),
    ])
    assert result.exit_code == 0, result.output
    assert 'Found 3 unique class names' in result.output
    assert '0 class name(s) skipped' in result.output


def test_build_reports_write_failure(tmp_path):
    tokens_path, config_path, page = _project(tmp_path)
    blocker = tmp_path / 'blocker'
    blocker.write_text('', encoding='utf-8')
    result = CliRunner().invoke(cli, [
        'build', str(page), '--tokens', str(tokens_path), '--config', str(config_path),
        '-o', str(blocker / 'output.css'),
    ])
    assert result.exit_code == 1
    assert 'Error writing CSS' in result.output


def test_resolve_command(tmp_path):
    tokens_path, config_path, _ = _project(tmp_path)
    result = CliRunner().invoke(cli, [
        'resolve', 'bg-blue', 'mystery', '--tokens', str(tokens_path), '--config', str(config_path),
    ])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        '.bg-blue { background-color: #3b82f6; }',
        '/* no rule for mystery */',
    ]


def test_resolve_requires_names():
    result = CliRunner().invoke(cli, ['resolve'])
    assert result.exit_code != 0


def test_tokens_command(tmp_path):
    tokens_path, config_path, _ = _project(tmp_path, config={'colors': {'brand': '#ff5500'}})
    result = CliRunner().invoke(cli, ['tokens', '--tokens', str(tokens_path), '--config', str(config_path)])
    assert result.exit_code == 0, result.output
    assert 'Tokens override-merged (tokens: loaded, config: loaded)' in result.output
    assert '  - colors: 2' in result.output
    assert '  - spacing: 1' in result.output


def test_build_scan_entries_follow_config_location(tmp_path, monkeypatch):
    project = tmp_path / 'project'
    (project / 'pages').mkdir(parents=True)
    (project / 'pages' / 'home.html').write_text('<div class="hidden bg-blue"></div>', encoding='utf-8')
    (project / 'tokens.json').write_text(json.dumps(TOKENS), encoding='utf-8')
    config_path = project / 'miniwing.config.json'
    config_path.write_text(json.dumps({'scan': ['./pages/home.html']}), encoding='utf-8')
    elsewhere = tmp_path / 'elsewhere'
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    output = tmp_path / 'out.css'
    result = CliRunner().invoke(cli, [
        'build', '--tokens', str(project / 'tokens.json'), '--config', str(config_path), '-o', str(output),
    ])
    assert result.exit_code == 0, result.output
    assert 'Found 2 unique class names' in result.output
    assert output.read_text(encoding='utf-8').endswith(
        '.hidden { display: none; }\n'
        '.bg-blue { background-color: #3b82f6; }\n'
    )
