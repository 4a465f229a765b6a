import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.html_parser import HTMLParser, parse_html
from core.dom_node import NodeKind, node_from_dict, node_name, aggregated_text


def elements(node):
    return [child for child in node.children if child.kind == NodeKind.ELEMENT]


def test_body_is_the_root():
    tree = parse_html('<html><head><title>t</title></head><body><p>x</p></body></html>')
    assert tree.kind == NodeKind.ELEMENT
    assert tree.tag_name == 'BODY'
    assert [c.tag_name for c in elements(tree)] == ['P']


def test_fragment_is_wrapped_in_synthetic_body():
    tree = parse_html('<div>1</div><div>2</div>')
    assert tree.tag_name == 'BODY'
    assert [c.tag_name for c in tree.children] == ['DIV', 'DIV']


def test_doctype_is_not_part_of_synthetic_body():
    tree = parse_html('<!DOCTYPE html><p>x</p>')
    assert [node_name(c) for c in tree.children] == ['P']


def test_tag_and_attribute_extraction():
    tree = parse_html('<div id="main" class="foo bar"><span data-x="1">Hello</span></div>')
    div = tree.children[0]
    assert div.tag_name == 'DIV'
    assert div.attributes == {'id': 'main', 'class': 'foo bar'}
    span = div.children[0]
    assert span.tag_name == 'SPAN'
    assert span.attributes['data-x'] == '1'
    assert span.children[0].kind == NodeKind.TEXT
    assert span.children[0].text_content == 'Hello'


def test_valueless_attribute_becomes_empty_string():
    tree = parse_html('<input disabled>')
    assert tree.children[0].attributes == {'disabled': ''}


def test_whitespace_text_is_preserved():
    tree = parse_html('<div>   <span>Hi</span> </div>')
    div = tree.children[0]
    assert [node_name(c) for c in div.children] == ['#text', 'SPAN', '#text']
    assert div.children[0].text_content == '   '


def test_comments_become_other_nodes():
    tree = parse_html('<div><!-- note --><span>Hi</span></div>')
    comment = tree.children[0].children[0]
    assert comment.kind == NodeKind.OTHER
    assert comment.name == '#comment'
    assert comment.text_content == ' note '


def test_aggregated_text_skips_comments():
    tree = parse_html('<p>Hello <!-- x --><b>world</b></p>')
    assert aggregated_text(tree.children[0]) == 'Hello world'


def test_empty_document():
    tree = parse_html('')
    assert tree.tag_name == 'BODY'
    assert tree.children == ()


def test_self_closing_tags():
    tree = parse_html('<div><img src="a.png" /><br/></div>')
    assert [c.tag_name for c in tree.children[0].children] == ['IMG', 'BR']


def test_parse_file(tmp_path):
    page = tmp_path / 'page.html'
    page.write_text('<body><h1>Title</h1></body>', encoding='utf-8')
    tree = HTMLParser().parse_file(page)
    assert tree.children[0].tag_name == 'H1'


def test_parse_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        HTMLParser().parse_file(tmp_path / 'missing.html')


def test_node_from_dict():
    tree = node_from_dict({
        'type': 'element',
        'tag': 'ul',
        'attrs': {'class': ['a', 'b'], 'id': 'list'},
        'children': [
            {'type': 'element', 'tag': 'li', 'children': [{'type': 'text', 'content': 'one'}]},
            {'type': 'comment'},
        ],
    })
    assert tree.tag_name == 'UL'
    assert tree.attributes == {'class': 'a b', 'id': 'list'}
    assert tree.children[0].children[0].text_content == 'one'
    assert tree.children[1].kind == NodeKind.OTHER


def test_node_from_dict_malformed_input():
    assert node_from_dict(None).kind == NodeKind.OTHER
    assert node_from_dict({'type': 'element'}).kind == NodeKind.OTHER
    assert node_from_dict({'type': 'text', 'content': 3}).kind == NodeKind.OTHER
