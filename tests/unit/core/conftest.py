"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
---
layout: post
title: Testing async code
description: Notes on fake timers
image: images/timers.png
canonicalUrl: https://example.com/blog/testing-async-code
---
# Testing async code

Some intro text.

{% highlight javascript linenos %}
const x = await tick();
// # not a heading
{% endhighlight %}

## Wrapping up

{% highlight shell %}
npm test
{% endhighlight %}
Thanks for reading.
"""


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST


@pytest.fixture(name="post_file")
def post_file_fixture(tmp_path):
    f = tmp_path / "2021-03-14-Testing Async Code.md"
    f.write_text(SAMPLE_POST, encoding="utf-8")
    return f
