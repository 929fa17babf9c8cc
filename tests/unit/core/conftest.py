"""Shared fixtures for core unit tests"""

import pytest

from lunor.core.parse import parse_text


SAMPLE_LNR = """\
TodoList(title:string, items:Todo[], onSelect?:(id: number) => void)
// Renders the list of todos
:state filter="all"
:data labels=['open', 'done']
# {title}
:for item in items
  :if {item.visible}
    :TodoItem label={item.label} done=false priority=2
- first
- second
**Done**
"""


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_LNR


@pytest.fixture(name="sample_result")
def sample_result_fixture():
    return parse_text(SAMPLE_LNR)
