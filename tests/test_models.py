"""Model validation tests."""

import json
import unittest

from pydantic import ValidationError

from slidestream.models.config import ParserConfig
from slidestream.models.slide import ContentNode, RootImage, Slide, TextLeaf


class TestModels(unittest.TestCase):
    def _slide(self) -> Slide:
        return Slide(
            id="slide-1",
            layout_type="left",
            root_image=RootImage(query="AI concept diagram"),
            alignment="center",
            content=[
                ContentNode(type="h1", children=[TextLeaf(text="AI技术培训课程", bold=True)]),
                ContentNode(
                    type="ul",
                    children=[ContentNode(type="li", children=[TextLeaf(text="监督学习")])],
                ),
            ],
        )

    def test_slide_json_uses_camel_case_aliases(self) -> None:
        data = json.loads(self._slide().to_json())
        self.assertEqual(data["layoutType"], "left")
        self.assertEqual(data["rootImage"], {"query": "AI concept diagram", "status": "pending"})
        self.assertNotIn("layout_type", data)

    def test_slide_roundtrip_json(self) -> None:
        slide = self._slide()
        round_tripped = Slide.model_validate_json(slide.to_json())
        self.assertEqual(round_tripped, slide)
        self.assertIsInstance(round_tripped.content[0].children[0], TextLeaf)
        self.assertIsInstance(round_tripped.content[1].children[0], ContentNode)

    def test_to_dict_omits_unset_optionals(self) -> None:
        data = ContentNode(type="p", children=[TextLeaf(text="x")]).to_dict()
        self.assertEqual(data, {"type": "p", "children": [{"text": "x"}]})

    def test_to_json_keeps_unicode(self) -> None:
        self.assertIn("监督学习", self._slide().to_json())

    def test_slide_is_immutable(self) -> None:
        slide = self._slide()
        with self.assertRaises(ValidationError):
            slide.id = "slide-2"

    def test_root_image_requires_query(self) -> None:
        with self.assertRaises(ValidationError):
            RootImage(query="")

    def test_root_image_rejects_invalid_status(self) -> None:
        with self.assertRaises(ValidationError):
            RootImage(query="cat", status="done")

    def test_slide_rejects_invalid_alignment(self) -> None:
        with self.assertRaises(ValidationError):
            Slide(id="slide-1", alignment="justify")

    def test_content_node_rejects_unknown_field(self) -> None:
        with self.assertRaises(ValidationError):
            ContentNode(type="p", colour="red")

    def test_parser_config_rejects_invalid_mode(self) -> None:
        with self.assertRaises(ValidationError):
            ParserConfig(ingest_mode="sometimes")

    def test_parser_config_defaults(self) -> None:
        config = ParserConfig()
        self.assertEqual(config.ingest_mode, "auto")
        self.assertEqual(config.slide_id_prefix, "slide-")
        self.assertEqual(config.layout_type_map["bullets"], "bullets")
        self.assertEqual(config.layout_type_map["left"], "left")


if __name__ == "__main__":
    unittest.main()
