import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.structure_comparator import ChangeAction, ChangeRecord
from core.dom_node import node_from_dict
from comparator.structure_diff import compare_trees, render_change, generate_diff_summary


@pytest.mark.parametrize('record, expected', [
    (ChangeRecord(ChangeAction.ADD_CHILD, '/BODY[1]', element='P', content='New paragraph'),
     '+ Added: <P>: "New paragraph" at /BODY[1]'),
    (ChangeRecord(ChangeAction.REMOVE_CHILD, '/BODY[0]/DIV[1]', element='SPAN', content='Hi'),
     '- Removed: <SPAN>: "Hi" at /BODY[0]/DIV[1]'),
    (ChangeRecord(ChangeAction.ADD_CHILD, '/BODY[2]', element='IMG', content=''),
     '+ Added: <IMG> at /BODY[2]'),
    (ChangeRecord(ChangeAction.MODIFY_TEXT, '/BODY[0]/P[0]', old_value='Hello', new_value='Hello there'),
     '~ Modified text: "Hello" → "Hello there"'),
    (ChangeRecord(ChangeAction.ADD_ATTRIBUTE, '/BODY[0]', element='A', content='target="_blank"'),
     '+ Added attribute on <A>: target="_blank"'),
    (ChangeRecord(ChangeAction.REMOVE_ATTRIBUTE, '/BODY[0]', element='A', content='target="_blank"'),
     '- Removed attribute on <A>: target="_blank"'),
    (ChangeRecord(ChangeAction.MODIFY_ATTRIBUTE, '/BODY[0]', element='IMG',
                  old_value='src="a.png"', new_value='src="b.png"'),
     '~ Modified attribute on <IMG>: src="a.png" → src="b.png"'),
    (ChangeRecord(ChangeAction.REPLACE_ELEMENT, '/BODY[0]', old_value='DIV', new_value='SECTION'),
     '↔ Replaced <DIV> with <SECTION> at /BODY[0]'),
    (ChangeRecord(ChangeAction.REPLACE_NODE, '/BODY[0]/DIV[0]', old_value='#comment', new_value='SPAN'),
     '↔ Replaced node #comment with SPAN at /BODY[0]/DIV[0]'),
])
def test_render_templates(record, expected):
    assert render_change(record) == expected


def test_root_path_renders_as_slash():
    record = ChangeRecord(ChangeAction.REPLACE_NODE, '', old_value='BODY', new_value='#text')
    assert render_change(record) == '↔ Replaced node BODY with #text at /'


def test_action_given_as_plain_string():
    record = ChangeRecord('replaceElement', '/BODY[0]', old_value='DIV', new_value='SECTION')
    assert render_change(record) == '↔ Replaced <DIV> with <SECTION> at /BODY[0]'


def test_unknown_action_renders_fallback_line():
    record = ChangeRecord('moveNode', '/BODY[0]')
    assert render_change(record) == '? Unknown action: moveNode'


def test_multiline_values_render_on_one_line():
    record = ChangeRecord(ChangeAction.MODIFY_TEXT, '', old_value='Hello\n   world', new_value='Bye\r\nworld')
    assert render_change(record) == '~ Modified text: "Hello world" → "Bye world"'


def test_summary_has_one_line_per_record():
    records = [
        ChangeRecord(ChangeAction.ADD_CHILD, '/BODY[3]', element='#text', content='\n  '),
        ChangeRecord('futureAction'),
        ChangeRecord(ChangeAction.MODIFY_TEXT, '', old_value='a\nb', new_value='c'),
    ]
    summary = generate_diff_summary(records)
    lines = summary.split('\n')
    assert len(lines) == 3
    assert lines[1] == '? Unknown action: futureAction'
    assert all(line.strip() for line in lines)


def test_empty_summary():
    assert generate_diff_summary([]) == ''


def test_line_breaks_in_tags_and_paths_stay_on_one_line():
    tree1 = node_from_dict({'type': 'element', 'tag': 'body', 'children': [
        {'type': 'element', 'tag': 'a\nb'},
    ]})
    tree2 = node_from_dict({'type': 'element', 'tag': 'body', 'children': [
        {'type': 'element', 'tag': 'a\nb', 'children': [{'type': 'text', 'content': 'y'}]},
    ]})
    result = compare_trees(tree1, tree2)
    assert result.count == 1
    assert result.diffs[0].path == '/BODY[0]/A\nB[0]'
    assert result.summary == '+ Added: <#text>: "y" at /BODY[0]/A B[0]'
    assert len(result.summary.split('\n')) == result.count


def test_line_breaks_in_element_names_are_folded():
    record = ChangeRecord(ChangeAction.REPLACE_ELEMENT, '/BODY[0]', old_value='A\nB', new_value='P')
    assert render_change(record) == '↔ Replaced <A B> with <P> at /BODY[0]'
    record = ChangeRecord(ChangeAction.ADD_ATTRIBUTE, '', element='X\r\nY', content='id="1"')
    assert render_change(record) == '+ Added attribute on <X Y>: id="1"'
