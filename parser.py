from __future__ import annotations
import re
from typing import Optional

xml_pattern = re.compile(r'(\<[^>]*?\>)', flags=re.DOTALL | re.MULTILINE)
comment_pattern = re.compile(r'\<!--.*?--\>', flags=re.DOTALL | re.MULTILINE)
first_word_pattern = re.compile(r'^\s*[/!?]*\s*([\w:.-]+)')

XML_ENTITIES = {
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&apos;': "'",
    '&amp;': '&',
}


def is_self_terminating(svg_value: str) -> bool:
    return svg_value.rstrip().endswith('/>')


def is_terminator(svg_value: str) -> bool:
    return svg_value.strip().startswith('</')


def is_declaration(svg_value: str) -> bool:
    return svg_value.strip()[:2] in ('<?', '<!')


def get_tag(svg_value: str) -> str:
    content = svg_value.strip()
    if content.startswith('</'):
        content = content[2:]
    elif content.startswith('<'):
        content = content[1:]
    if content.endswith('>'):
        content = content[:-1]
    if content.endswith('/'):
        content = content[:-1]

    match = first_word_pattern.search(content)
    if match:
        # drop any namespace prefix, <svg:circle> is a circle
        return match.group(1).split(':')[-1]
    return ""


def unescape(value: str) -> str:
    if '&' not in value:
        return value
    for entity, char in XML_ENTITIES.items():
        value = value.replace(entity, char)
    return value


def parse_attributes(element: str) -> dict:
    attributes = {}

    content = element.strip()
    if content.startswith('</'):
        return attributes
    if content.startswith('<'):
        content = content[1:]
    if content.endswith('>'):
        content = content[:-1]
    if content.endswith('/'):
        content = content[:-1].rstrip()

    parts = content.split(None, 1)
    if len(parts) < 2:
        return attributes

    attr_string = parts[1]

    state = 0
    accumulator = ""
    current_key = ""
    quote = None

    for char in attr_string:
        if state == 0:
            if char == '=':
                current_key = accumulator.strip()
                accumulator = ""
                state = 1
            elif not char.isspace():
                accumulator += char
        elif state == 1:
            if char == '"' or char == "'":
                quote = char
                state = 2
        elif state == 2:
            if char == quote:
                attributes[current_key] = unescape(accumulator)
                accumulator = ""
                current_key = ""
                quote = None
                state = 0
            else:
                accumulator += char

    if current_key and current_key not in attributes and accumulator:
        attributes[current_key] = unescape(accumulator)

    return attributes


def split_entries(data: str) -> list[str]:
    data = comment_pattern.sub('', data)
    return xml_pattern.findall(data)


def parse_svg_file(path: str) -> list[str]:
    with open(path, 'r', encoding='utf-8') as file:
        data = file.read()
    return split_entries(data)


class Node:
    def __init__(self, element: str):
        self.element = element
        self.tag = get_tag(element)
        self.attributes = parse_attributes(element)
        self.children = []
        self.parent = None

    def add_child(self, element: str):
        new_node = Node(element)
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def add_node_child(self, new_node: 'Node'):
        new_node.parent = self
        self.children.append(new_node)
        return new_node

    def compare_tag(self, element: str) -> bool:
        return self.tag == get_tag(element)

    def get_attribute(self, attr_name: str, default: str = None) -> str:
        return self.attributes.get(attr_name, default)

    def format_tree(self, level=0) -> str:
        indent = '    ' * level
        attrs_str = ', '.join([f"{k}={v}" for k, v in list(self.attributes.items())[:3]])
        if len(self.attributes) > 3:
            attrs_str += "..."
        lines = [f"{indent}- {self.tag} ({attrs_str})"]
        for child in self.children:
            lines.append(child.format_tree(level + 1))
        return '\n'.join(lines)


def build_tree(entries: list[str]) -> tuple[Optional[Node], dict]:
    """Assemble tag entries into a Node tree rooted at the first <svg>.

    Returns the root (None if there is no <svg>) and the prolog entries
    (xml declaration, doctype...) seen before it, keyed by tag.
    """
    metadata = {}
    iterator = iter(entries)
    root = None

    for svg_element in iterator:
        tag = get_tag(svg_element)
        if tag == "svg" and not is_terminator(svg_element):
            root = Node(svg_element)
            break
        metadata[tag] = svg_element

    if root is None or is_self_terminating(root.element):
        return root, metadata

    current = root
    for svg_element in iterator:
        if current is None:
            break

        if is_declaration(svg_element):
            continue

        if is_terminator(svg_element):
            if current.compare_tag(svg_element):
                current = current.parent
            continue

        if is_self_terminating(svg_element):
            current.add_child(svg_element)
        else:
            current = current.add_node_child(Node(svg_element))

    return root, metadata
