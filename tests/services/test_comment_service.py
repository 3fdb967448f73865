"""Comment thread on certificate requests."""

from uuid import uuid4

from certificate_kernel.exceptions import CertificateErrorCode
from certificate_services._command_types import CreateCommentCommand
from tests.support.fakes import admin, client


def test_owner_comments_with_trimmed_content(comment_service, certificates):
    owner = client(name="Ana")
    request = certificates.add(owner_id=owner.user_id)

    result = comment_service.create_comment(
        CreateCommentCommand(certificate_id=request.id, actor=owner, content="  hello  ")
    )

    assert result.value.content == "hello"
    assert result.value.user_name == "Ana"


def test_author_name_falls_back_to_role(comment_service, certificates):
    request = certificates.add()

    result = comment_service.create_comment(
        CreateCommentCommand(certificate_id=request.id, actor=admin(), content="x")
    )

    assert result.value.user_name == "admin"


def test_blank_comment_rejected(comment_service, certificates, comments):
    request = certificates.add()

    result = comment_service.create_comment(
        CreateCommentCommand(certificate_id=request.id, actor=admin(), content="  ")
    )

    assert result.error_code == CertificateErrorCode.INVALID_COMMENT_CONTENT
    assert comments.comments == {}


def test_foreign_client_cannot_comment_or_list(comment_service, certificates):
    request = certificates.add()
    stranger = client()

    created = comment_service.create_comment(
        CreateCommentCommand(certificate_id=request.id, actor=stranger, content="hi")
    )
    listed = comment_service.list_comments(request.id, stranger)

    assert created.error_code == CertificateErrorCode.CERTIFICATE_ACCESS_DENIED
    assert listed.error_code == CertificateErrorCode.CERTIFICATE_ACCESS_DENIED


def test_list_comments(comment_service, certificates):
    owner = client()
    request = certificates.add(owner_id=owner.user_id)
    for text in ("one", "two"):
        comment_service.create_comment(
            CreateCommentCommand(certificate_id=request.id, actor=owner, content=text)
        )

    result = comment_service.list_comments(request.id, owner)

    assert [c.content for c in result.value] == ["one", "two"]


class TestDelete:
    def _comment(self, comment_service, request):
        return comment_service.create_comment(
            CreateCommentCommand(certificate_id=request.id, actor=admin(), content="x")
        ).value

    def test_admin_deletes(self, comment_service, certificates, comments):
        request = certificates.add()
        comment = self._comment(comment_service, request)

        result = comment_service.delete_comment(request.id, comment.id, admin())

        assert result.is_success
        assert comments.comments == {}

    def test_client_cannot_delete(self, comment_service, certificates):
        owner = client()
        request = certificates.add(owner_id=owner.user_id)
        comment = self._comment(comment_service, request)

        result = comment_service.delete_comment(request.id, comment.id, owner)

        assert result.error_code == CertificateErrorCode.CERTIFICATE_ACCESS_DENIED

    def test_unknown_comment(self, comment_service, certificates):
        request = certificates.add()

        result = comment_service.delete_comment(request.id, uuid4(), admin())

        assert result.error_code == CertificateErrorCode.COMMENT_NOT_FOUND

    def test_comment_of_other_request(self, comment_service, certificates, comments):
        request, other = certificates.add(), certificates.add()
        comment = self._comment(comment_service, request)

        result = comment_service.delete_comment(other.id, comment.id, admin())

        assert result.error_code == CertificateErrorCode.COMMENT_CERTIFICATE_MISMATCH
        assert comment.id in comments.comments
