"""Integration tests for the mdpost CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdpost.cli.cli import app


POST = """\
---
layout: post
title: Fake timers
---
# Fake timers

{% highlight javascript linenos %}
jest.useFakeTimers();
{% endhighlight %}
"""


@pytest.fixture(name="runner")
def runner_fixture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture(name="post")
def post_fixture(tmp_path):
    f = tmp_path / "posts" / "2019-05-01-fake-timers.md"
    f.parent.mkdir()
    f.write_text(POST)
    return f


def test_check_valid(runner, post):
    result = runner.invoke(app, ["check", str(post.parent)])
    assert result.exit_code == 0, result.output
    assert "1 valid, 0 invalid" in result.output


def test_check_invalid_reports_location(runner, post):
    bad = post.parent / "bad.md"
    bad.write_text("---\nlayout: post\ntitle: T\n---\n{% highlight js %}\nnever closed\n")
    result = runner.invoke(app, ["check", str(post.parent)])
    assert result.exit_code == 1
    assert f"{bad}:5: UnterminatedCodeBlock" in result.output
    assert "1 valid, 1 invalid" in result.output


def test_check_require_option(runner, post):
    result = runner.invoke(app, ["check", str(post), "--require", "description"])
    assert result.exit_code == 1
    assert "MissingRequiredField" in result.output


def test_check_nothing_found(runner, tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path)])
    assert result.exit_code == 1
    assert "No content files found" in result.output


def test_show(runner, post):
    result = runner.invoke(app, ["show", str(post)])
    assert result.exit_code == 0, result.output
    assert "title: Fake timers" in result.output
    assert "code javascript linenos (1 lines)" in result.output


def test_show_json(runner, post):
    result = runner.invoke(app, ["show", str(post), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["slug"] == "fake-timers"
    assert data["date"] == "2019-05-01"


def test_show_missing_file(runner, tmp_path):
    result = runner.invoke(app, ["show", str(tmp_path / "nope.md")])
    assert result.exit_code == 1


def test_outline(runner, post):
    result = runner.invoke(app, ["outline", str(post)])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "# Fake timers"


def test_fmt_prints_canonical_source(runner, post):
    result = runner.invoke(app, ["fmt", str(post)])
    assert result.exit_code == 0, result.output
    assert result.stdout == POST


def test_export(runner, post, tmp_path):
    """export writes normalized source and sidecar JSON for each file."""
    out = tmp_path / "dist"
    result = runner.invoke(app, ["export", str(post.parent), "--out-dir", str(out)])
    assert result.exit_code == 0, result.output
    assert (out / "2019-05-01-fake-timers.md").read_text() == POST
    assert (out / "2019-05-01-fake-timers.json").exists()
    assert "Exported 1 document(s)" in result.output


def test_export_invalid_file_fails(runner, post, tmp_path):
    (post.parent / "bad.md").write_text("no metadata\n")
    result = runner.invoke(app, ["export", str(post.parent), "--out-dir", str(tmp_path / "dist")])
    assert result.exit_code == 1
    assert "MalformedMetadataBlock" in result.output


def test_check_reports_metadata_line(runner, post):
    bad = post.parent / "bad-image.md"
    bad.write_text("---\nlayout: post\ntitle: T\nimage: /abs.png\n---\n")
    result = runner.invoke(app, ["check", str(bad)])
    assert result.exit_code == 1
    assert f"{bad}:4: InvalidFieldFormat" in result.output
