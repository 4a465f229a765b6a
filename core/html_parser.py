"""
HTML Parser Module
Parses HTML content into the Node tree used for comparison.
"""

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag
from typing import Dict, Optional, Union
from pathlib import Path
import logging

from utils.file_utils import read_file_content
from .dom_node import Node, NodeKind

logger = logging.getLogger(__name__)

# Node names for the non-text strings BeautifulSoup keeps in the tree.
# Order matters: Doctype is a Declaration subclass.
OTHER_NODE_NAMES = (
    (Comment, '#comment'),
    (CData, '#cdata-section'),
    (ProcessingInstruction, '#processing-instruction'),
    (Doctype, '#doctype'),
    (Declaration, '#declaration'),
)


class HTMLParser:
    """Parser for HTML content."""

    def __init__(self, features: str = 'html.parser'):
        """Initialize the HTML parser."""
        self.features = features

    def parse_file(self, file_path: Union[str, Path]) -> Node:
        """Parse HTML file and return its BODY tree."""
        try:
            logger.info(f"Starting to parse file: {file_path}")
            content = read_file_content(Path(file_path))
            logger.debug(f"Successfully read file, content length: {len(content)}")
            return self.parse(content)

        except Exception as e:
            logger.error(f"Error parsing file {file_path}: {str(e)}", exc_info=True)
            raise

    def parse(self, html_content: str) -> Node:
        """Parse HTML content and return the BODY element as a Node tree."""
        try:
            logger.info("Starting HTML parsing")
            logger.debug(f"Input HTML content length: {len(html_content)}")

            # Keep class and other multi-valued attributes as authored strings
            soup = BeautifulSoup(html_content, self.features, multi_valued_attributes=None)
            logger.debug("BeautifulSoup parsing complete")

            if soup.body is not None:
                result = self._parse_node(soup.body)
            else:
                # Fragments have no body; wrap the top-level nodes in one
                logger.debug("No body element found, wrapping top-level nodes")
                children = [
                    self._parse_node(child) for child in soup.contents
                    if not isinstance(child, Doctype)
                ]
                result = Node(kind=NodeKind.ELEMENT, tag_name='BODY', attributes={}, children=tuple(children))

            logger.info("HTML parsing complete")
            return result

        except Exception as e:
            logger.error(f"Error parsing HTML: {str(e)}", exc_info=True)
            raise

    def _parse_node(self, node) -> Node:
        """Parse a single HTML node and its children."""
        if isinstance(node, Tag):
            attrs = self._parse_attributes(node)
            children = tuple(self._parse_node(child) for child in node.children)
            logger.debug(f"Node {node.name} has {len(children)} children")
            return Node(
                kind=NodeKind.ELEMENT,
                tag_name=node.name.upper(),
                attributes=attrs,
                children=children,
            )

        other_name = self._other_node_name(node)
        if other_name is not None:
            return Node(kind=NodeKind.OTHER, name=other_name, text_content=str(node))

        if isinstance(node, NavigableString):
            return Node(kind=NodeKind.TEXT, text_content=str(node))

        logger.debug(f"Unrecognized node type: {type(node).__name__}")
        return Node(kind=NodeKind.OTHER)

    def _other_node_name(self, node) -> Optional[str]:
        for node_type, name in OTHER_NODE_NAMES:
            if isinstance(node, node_type):
                return name
        return None

    def _parse_attributes(self, node: Tag) -> Dict[str, str]:
        """Parse HTML node attributes into plain strings."""
        attrs = {}
        for key, value in node.attrs.items():
            if isinstance(value, list):
                attrs[key] = ' '.join(value)
            elif value is None:
                attrs[key] = ''
            else:
                attrs[key] = str(value)
        return attrs


def parse_html(html_content: str) -> Node:
    return HTMLParser().parse(html_content)
