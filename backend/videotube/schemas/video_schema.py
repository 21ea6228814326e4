# 영상 목록 페이지 스키마
# - mongoose-aggregate-paginate 응답과 같은 키 구성

from typing import Any, Dict, List, Optional

from .response_schema import CamelModel


class VideoPage(CamelModel):
    docs: List[Dict[str, Any]]
    total_docs: int
    limit: int
    page: int
    total_pages: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None
