"""도메인 오류 정의입니다. 서비스 레이어가 발생시키고 main.py의 핸들러가 HTTP 응답으로 변환합니다."""


class DomainError(Exception):
    status_code = 400
    detail = "잘못된 요청입니다."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class VersionNotFound(DomainError):
    status_code = 404
    detail = "버전 이력을 찾을 수 없습니다."


class VersionMismatch(DomainError):
    status_code = 400
    detail = "해당 게시글의 버전이 아닙니다."


class VersionConflict(DomainError):
    status_code = 409
    detail = "버전 번호 할당이 충돌했습니다. 잠시 후 다시 시도해 주세요."


class VersionImmutable(DomainError):
    status_code = 400
    detail = "저장된 버전은 수정할 수 없습니다."


class BlogNotFound(DomainError):
    status_code = 404
    detail = "게시글을 찾을 수 없습니다."


class BlogAccessDenied(DomainError):
    status_code = 403
    detail = "게시글 작성자만 접근할 수 있습니다."


class SlugAlreadyExists(DomainError):
    status_code = 409
    detail = "이미 사용 중인 slug입니다."


class UnknownTag(DomainError):
    status_code = 400
    detail = "존재하지 않는 태그입니다."


class CategoryNotFound(DomainError):
    status_code = 400
    detail = "존재하지 않는 카테고리입니다."
