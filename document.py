from __future__ import annotations
import logging
from typing import Optional
from attributes import match_fill_color, match_rotate, match_translate
from backend import Backend
from config import RenderOptions
from errors import InvalidAttribute, MissingAttribute
from geometry import normalize_length
from parser import Node, build_tree, parse_svg_file, split_entries
from shapes import Circle, Path, Shape

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT = 100.0


def _required(node: Node, attr_name: str) -> str:
    value = node.get_attribute(attr_name)
    if value is None:
        raise MissingAttribute(node.tag, attr_name)
    return value


def _required_length(node: Node, attr_name: str) -> float:
    value = _required(node, attr_name)
    length = normalize_length(value)
    if length is None:
        raise InvalidAttribute(node.tag, attr_name, value)
    return length


def build_circle(node: Node) -> Circle:
    r = _required_length(node, 'r')
    if r < 0:
        raise InvalidAttribute(node.tag, 'r', node.get_attribute('r'))
    return Circle(_required_length(node, 'cx'), _required_length(node, 'cy'), r)


def build_path(node: Node) -> Path:
    return Path(_required(node, 'd'))


SHAPE_BUILDERS = {
    'circle': build_circle,
    'path': build_path,
}


def find_transformations(shape: Shape, transform: Optional[str], style: Optional[str],
                         shorthand: str = 'interleave'):
    translate = match_translate(transform)
    if translate is not None:
        shape.set_translate(*translate)
    elif transform and 'translate' in transform:
        logger.warning("Could not read translate from transform=%r", transform)

    angle = match_rotate(transform)
    if angle is not None:
        shape.set_rotate(angle)
    elif transform and 'rotate' in transform:
        logger.warning("Could not read rotate from transform=%r", transform)

    color = match_fill_color(style, shorthand)
    if color is not None:
        shape.set_color(color)


def build_shape(node: Node, options: RenderOptions = None) -> Optional[Shape]:
    builder = SHAPE_BUILDERS.get(node.tag)
    if builder is None:
        return None

    options = options or RenderOptions()
    shape = builder(node)
    find_transformations(shape, node.get_attribute('transform'), node.get_attribute('style'),
                         options.color_shorthand)
    return shape


class Document:
    def __init__(self, root: Optional[Node], options: RenderOptions = None, metadata: dict = None):
        self.options = options or RenderOptions()
        self.svg_tree = root
        self.metadata = metadata or {}
        self.shapes: list[Shape] = []
        self.viewport_width = None
        self.viewport_height = None
        self.viewbox = None
        self.validation_errors = []
        self.validation_warnings = []
        self._extract_viewport_info()
        self._build_shapes()
        self.validate()

    @classmethod
    def from_string(cls, data: str, options: RenderOptions = None) -> 'Document':
        root, metadata = build_tree(split_entries(data))
        return cls(root, options, metadata)

    @classmethod
    def from_file(cls, path: str, options: RenderOptions = None) -> 'Document':
        root, metadata = build_tree(parse_svg_file(path))
        return cls(root, options, metadata)

    def _build_shapes(self):
        if self.svg_tree is None:
            return

        for child in self.svg_tree.children:
            shape = build_shape(child, self.options)
            if shape is None:
                logger.debug("Skipping unsupported element <%s>", child.tag)
                continue
            self.shapes.append(shape)

    def _extract_viewport_info(self):
        if self.svg_tree is None:
            return

        attrs = self.svg_tree.attributes

        if 'width' in attrs:
            self.viewport_width = normalize_length(attrs['width'])
        if 'height' in attrs:
            self.viewport_height = normalize_length(attrs['height'])

        if 'viewBox' in attrs:
            parts = attrs['viewBox'].replace(',', ' ').split()
            if len(parts) >= 4:
                try:
                    self.viewbox = tuple(float(part) for part in parts[:4])
                except ValueError:
                    logger.warning("Ignoring unreadable viewBox=%r", attrs['viewBox'])
                    self.viewbox = None

        if self.viewbox:
            if self.viewport_width is None:
                self.viewport_width = self.viewbox[2]
            if self.viewport_height is None:
                self.viewport_height = self.viewbox[3]

        if self.viewport_width is None:
            self.viewport_width = DEFAULT_VIEWPORT
        if self.viewport_height is None:
            self.viewport_height = DEFAULT_VIEWPORT

    def viewbox_transform(self, width: float = None, height: float = None) -> tuple[float, float, float, float]:
        """Scale and offset (sx, sy, tx, ty) mapping user space onto a width x height canvas."""
        width = self.viewport_width if width is None else width
        height = self.viewport_height if height is None else height

        if self.viewbox is None:
            scale_x = width / self.viewport_width if self.viewport_width > 0 else 1.0
            scale_y = height / self.viewport_height if self.viewport_height > 0 else 1.0
            return (scale_x, scale_y, 0.0, 0.0)

        vb_min_x, vb_min_y, vb_width, vb_height = self.viewbox
        scale_x = width / vb_width if vb_width > 0 else 1.0
        scale_y = height / vb_height if vb_height > 0 else 1.0

        preserve_aspect = self.svg_tree.get_attribute('preserveAspectRatio', 'xMidYMid meet')
        parts = preserve_aspect.strip().split()

        if len(parts) == 0 or parts[0].lower() == 'none':
            return (scale_x, scale_y, -vb_min_x * scale_x, -vb_min_y * scale_y)

        meet_or_slice = parts[1].lower() if len(parts) > 1 else 'meet'
        scale = min(scale_x, scale_y) if meet_or_slice == 'meet' else max(scale_x, scale_y)

        scaled_width = vb_width * scale
        scaled_height = vb_height * scale
        align = parts[0].lower()

        if 'xmin' in align:
            offset_x = 0.0
        elif 'xmax' in align:
            offset_x = width - scaled_width
        else:
            offset_x = (width - scaled_width) / 2.0

        if 'ymin' in align:
            offset_y = 0.0
        elif 'ymax' in align:
            offset_y = height - scaled_height
        else:
            offset_y = (height - scaled_height) / 2.0

        return (scale, scale, offset_x - vb_min_x * scale, offset_y - vb_min_y * scale)

    def apply_viewbox(self, backend: Backend, width: float = None, height: float = None):
        sx, sy, tx, ty = self.viewbox_transform(width, height)
        if tx or ty:
            backend.translate(tx, ty)
        if sx != 1.0 or sy != 1.0:
            backend.scale(sx, sy)

    def draw(self, backend: Backend) -> list[int]:
        """Draw every shape in document order; returns indices of skipped shapes."""
        failed = []
        for index, shape in enumerate(self.shapes):
            if not shape.draw(backend, self.options):
                failed.append(index)
        if failed:
            logger.info("Drew %d of %d shapes", len(self.shapes) - len(failed), len(self.shapes))
        return failed

    def validate(self):
        self.validation_errors = []
        self.validation_warnings = []

        if self.svg_tree is None:
            self.validation_errors.append("No root <svg> element found")
            return

        if self.viewport_width <= 0:
            self.validation_errors.append(f"Invalid viewport width: {self.viewport_width}")

        if self.viewport_height <= 0:
            self.validation_errors.append(f"Invalid viewport height: {self.viewport_height}")

        if self.viewbox is not None:
            vb_min_x, vb_min_y, vb_width, vb_height = self.viewbox
            if vb_width <= 0:
                self.validation_errors.append(f"Invalid viewBox width: {vb_width}")
            if vb_height <= 0:
                self.validation_errors.append(f"Invalid viewBox height: {vb_height}")

        for shape in self.shapes:
            if isinstance(shape, Path) and not shape.operations.strip():
                self.validation_warnings.append("<path> has empty 'd' attribute")

        skipped = sorted({child.tag for child in self.svg_tree.children if child.tag not in SHAPE_BUILDERS})
        if skipped:
            self.validation_warnings.append(f"Unsupported elements ignored: {', '.join(skipped)}")

    def is_valid(self) -> bool:
        return len(self.validation_errors) == 0

    def validation_report(self) -> list[str]:
        if self.is_valid() and len(self.validation_warnings) == 0:
            return ["SVG validation: [OK] Valid"]

        lines = []
        if not self.is_valid():
            lines.append("SVG validation: [ERROR] Errors found:")
            lines.extend(f"  ERROR: {error}" for error in self.validation_errors)

        if self.validation_warnings:
            lines.append("SVG validation: [WARNING] Warnings:")
            lines.extend(f"  WARNING: {warning}" for warning in self.validation_warnings)
        return lines
