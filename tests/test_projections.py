import unittest

from jina_tools_mcp import projections
from jina_tools_mcp.dynamic import MalformedResponseError


class TestProjections(unittest.TestCase):

    def test_embeddings_keep_only_the_vector(self):
        body = {"model": "jina-embeddings-v3", "data": [
            {"object": "embedding", "index": 0, "embedding": [0.1, 0.2]},
            {"object": "embedding", "index": 1, "embedding": [0.3, 0.4]},
        ]}
        self.assertEqual(
            projections.embeddings("GetEmbeddings", body),
            [{"embedding": [0.1, 0.2]}, {"embedding": [0.3, 0.4]}],
        )

    def test_rerank_flattens_document_text(self):
        body = {"results": [
            {"index": 1, "relevance_score": 0.9, "document": {"text": "Paris is the capital."}},
            {"index": 0, "relevance_score": 0.1, "document": "Berlin is a city."},
        ]}
        self.assertEqual(projections.rerank("RerankDocuments", body), [
            {"index": 1, "relevance_score": 0.9, "document": "Paris is the capital."},
            {"index": 0, "relevance_score": 0.1, "document": "Berlin is a city."},
        ])

    def test_read_content_uses_url_as_id(self):
        body = {"code": 200, "data": {
            "title": "Example", "url": "https://example.com", "content": "Hello", "usage": {"tokens": 3},
        }}
        self.assertEqual(projections.read_content("ReadContent", body), {
            "id": "https://example.com", "title": "Example", "content": "Hello", "url": "https://example.com",
        })

    def test_read_content_missing_title(self):
        body = {"data": {"url": "https://example.com", "content": "Hello"}}
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.read_content("ReadContent", body)
        self.assertEqual(ctx.exception.field, "data.title")

    def test_search_tolerates_missing_description(self):
        body = {"data": [{"title": "T", "url": "https://a.example", "content": "C"}]}
        self.assertEqual(projections.search("SearchWeb", body), [
            {"title": "T", "description": None, "url": "https://a.example", "content": "C"},
        ])

    def test_verification(self):
        body = {"data": {
            "factuality": 0.95, "result": True, "reason": "Supported.", "usage": {},
            "references": [{"url": "https://a.example", "keyQuote": "quote", "isSupportive": True}],
        }}
        self.assertEqual(projections.verification("VerifyStatement", body), {
            "factuality": 0.95, "result": True, "reason": "Supported.",
            "references": [{"url": "https://a.example", "keyQuote": "quote", "isSupportive": True}],
        })

    def test_verification_without_result(self):
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.verification("VerifyStatement", {"data": {"factuality": 0.1, "reason": "r"}})
        self.assertEqual(ctx.exception.field, "data.result")

    def test_verification_references_must_be_a_list(self):
        body = {"data": {"factuality": 0.5, "result": False, "reason": "r", "references": "abc"}}
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.verification("VerifyStatement", body)
        self.assertEqual(ctx.exception.field, "data.references")

    def test_verification_without_references(self):
        body = {"data": {"factuality": 0.5, "result": False, "reason": "r"}}
        self.assertEqual(projections.verification("VerifyStatement", body)["references"], [])

    def test_segmentation_drops_extra_fields(self):
        body = {"num_tokens": 6, "tokenizer": "cl100k_base", "num_chunks": 2,
                "chunk_positions": [[0, 5], [5, 10]], "chunks": ["Hello", " world"]}
        self.assertEqual(projections.segmentation("SegmentText", body), {
            "num_tokens": 6, "num_chunks": 2, "chunks": ["Hello", " world"],
        })

    def test_segmentation_chunk_count_mismatch(self):
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.segmentation("SegmentText", {"num_tokens": 1, "num_chunks": 2, "chunks": ["a"]})
        self.assertEqual(ctx.exception.field, "chunks")

    def test_classification(self):
        body = {"data": [{"object": "classification", "index": 0, "prediction": "positive",
                          "score": 0.8, "predictions": []}]}
        self.assertEqual(projections.classification("ClassifyText", body), [
            {"index": 0, "prediction": "positive", "score": 0.8},
        ])

    def test_legacy_items(self):
        item = {"id": "1", "title": "T", "content": "C", "url": "https://a.example", "extra": 1}
        expected = {"id": "1", "title": "T", "content": "C", "url": "https://a.example"}
        self.assertEqual(projections.content_items("FetchContent", {"items": [item]}), [expected])
        self.assertEqual(projections.content_item("FetchContentById", item), expected)

    def test_legacy_item_requires_id(self):
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.content_items("FetchRelatedContent", {"items": [{"title": "T", "content": "C", "url": "u"}]})
        self.assertEqual(ctx.exception.field, "items[0].id")

    def test_list_field_of_wrong_type(self):
        with self.assertRaises(MalformedResponseError) as ctx:
            projections.embeddings("GetEmbeddings", {"data": {"embedding": []}})
        self.assertEqual(ctx.exception.field, "data")
        self.assertIn("GetEmbeddings", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
