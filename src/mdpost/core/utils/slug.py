"""Slug and date derivation from post filenames"""

import re
from datetime import date
from typing import Optional


POST_STEM_RE = re.compile(r'^(?P<date>\d{4}-\d{2}-\d{2})-(?P<name>.+)$')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def split_post_stem(stem: str) -> tuple[Optional[date], str]:
    """Split a 'YYYY-MM-DD-name' stem into (date, slug); date is None when absent or invalid."""
    m = POST_STEM_RE.match(stem)
    if m:
        try:
            return date.fromisoformat(m.group('date')), slugify(m.group('name'))
        except ValueError:
            pass
    return None, slugify(stem)
