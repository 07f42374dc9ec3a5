"""서비스 레이어 패키지 초기화 모듈입니다."""

from blog_history.services import (
    auth_service,
    blog_service,
    version_service,
)
