# 영상 저장소 레이어
# - aggregate 기반 페이지네이션 ($facet 한 번으로 목록 + 전체 개수 조회)

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.video import Video
from ..schemas.video_schema import VideoPage

DEFAULT_LIMIT = 10


def normalize_page(page: int, limit: int) -> Tuple[int, int]:
    page = page if page and page >= 1 else 1
    limit = limit if limit and limit >= 1 else DEFAULT_LIMIT
    return page, limit


def build_paginate_pipeline(
    stages: Optional[Sequence[Dict[str, Any]]],
    page: int,
    limit: int,
) -> List[Dict[str, Any]]:
    """사용자 정의 stage 뒤에 $facet 페이지네이션 stage를 붙입니다.

    Args:
        stages: $match, $sort 등 선행 aggregation stage 목록
        page: 1부터 시작하는 페이지 번호
        limit: 페이지당 문서 수
    """
    page, limit = normalize_page(page, limit)
    return [
        *(stages or []),
        {
            "$facet": {
                "docs": [{"$skip": (page - 1) * limit}, {"$limit": limit}],
                "total": [{"$count": "count"}],
            }
        },
    ]


def build_page(result: Dict[str, Any], page: int, limit: int) -> VideoPage:
    page, limit = normalize_page(page, limit)
    total = result.get("total") or []
    total_docs = total[0]["count"] if total else 0
    # 결과가 없어도 전체 페이지 수는 1 (mongoose-aggregate-paginate와 동일)
    total_pages = math.ceil(total_docs / limit) or 1
    has_prev = page > 1
    has_next = page < total_pages
    return VideoPage(
        docs=result.get("docs") or [],
        total_docs=total_docs,
        limit=limit,
        page=page,
        total_pages=total_pages,
        paging_counter=(page - 1) * limit + 1,
        has_prev_page=has_prev,
        has_next_page=has_next,
        prev_page=page - 1 if has_prev else None,
        next_page=page + 1 if has_next else None,
    )


class VideoRepository:
    async def paginate(
        self,
        stages: Optional[Sequence[Dict[str, Any]]] = None,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> VideoPage:
        pipeline = build_paginate_pipeline(stages, page, limit)
        results = await Video.aggregate(pipeline).to_list()
        return build_page(results[0] if results else {}, page, limit)
