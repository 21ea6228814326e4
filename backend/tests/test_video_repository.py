# aggregate 페이지네이션 파이프라인/메타데이터 검증 (DB 없음)
from videotube.repositories.video_repository import DEFAULT_LIMIT, build_page, build_paginate_pipeline


def test_pipeline_appends_facet_after_custom_stages():
    match = {"$match": {"is_published": True}}
    pipeline = build_paginate_pipeline([match], page=3, limit=5)
    assert pipeline[0] == match
    facet = pipeline[1]["$facet"]
    assert facet["docs"] == [{"$skip": 10}, {"$limit": 5}]
    assert facet["total"] == [{"$count": "count"}]


def test_pipeline_clamps_page_and_limit():
    pipeline = build_paginate_pipeline(None, page=0, limit=0)
    assert len(pipeline) == 1
    assert pipeline[0]["$facet"]["docs"] == [{"$skip": 0}, {"$limit": DEFAULT_LIMIT}]


def test_build_page_middle():
    docs = [{"title": f"v{i}"} for i in range(5)]
    page = build_page({"docs": docs, "total": [{"count": 23}]}, page=2, limit=5)
    assert page.total_docs == 23
    assert page.total_pages == 5
    assert page.has_prev_page and page.has_next_page
    assert (page.prev_page, page.next_page) == (1, 3)
    assert page.paging_counter == 6
    assert page.docs == docs


def test_build_page_last_and_empty():
    last = build_page({"docs": [{"title": "v"}], "total": [{"count": 11}]}, page=2, limit=10)
    assert not last.has_next_page
    assert last.next_page is None

    empty = build_page({}, page=1, limit=10)
    assert empty.total_docs == 0
    assert empty.total_pages == 1
    assert empty.paging_counter == 1
    assert empty.docs == []
    assert not empty.has_prev_page and not empty.has_next_page


def test_page_serializes_camel_case():
    page = build_page({"docs": [], "total": [{"count": 1}]}, page=1, limit=10)
    dumped = page.model_dump(by_alias=True)
    assert dumped["totalDocs"] == 1
    assert dumped["hasNextPage"] is False
    assert dumped["pagingCounter"] == 1
