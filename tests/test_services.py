from unittest.mock import MagicMock

from egov_cms_client.http import HttpClient
from egov_cms_client.services import build_service
from egov_cms_client.storage import MemoryStorage

from .conftest import envelope


def test_calls_carry_the_current_session_token(service, apis):
    service.list_articles("BBS1")
    apis.board.get_list.assert_called_with(None, "BBS1", 1, None, None)

    service.session.set_token("jwt")
    service.get_my_info()
    service.list_members(2)

    apis.mypage.get_my_info.assert_called_once_with("jwt")
    apis.admin.get_members.assert_called_once_with("jwt", 2)


def test_public_calls_do_not_need_a_session(service, apis):
    apis.member.check_id.return_value = envelope(200, result={"usedCnt": 0})

    assert service.check_member_id("newbie").ok
    service.get_agreement()

    apis.member.check_id.assert_called_once_with("newbie")
    apis.member.get_agreement.assert_called_once_with()


def test_build_service_shares_one_http_client(settings, scheduler):
    http_client = MagicMock(spec=HttpClient)
    http_client.request_json.return_value = envelope(200, result={"jToken": "jwt", "resultVO": {"id": "hong", "name": "Hong"}})
    storage = MemoryStorage()

    service = build_service(settings, storage=storage, scheduler=scheduler, http_client=http_client)

    assert service.session.login("hong", "secret")
    service.get_board_info("BBS1")

    http_client.request_json.assert_called_with("GET", "/boardFileAtch/BBS1", token="jwt")
    assert service.session.has_storage
    assert service.ui.toasts == ()
