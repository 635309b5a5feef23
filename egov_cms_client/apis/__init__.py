from .auth_api import AuthApi
from .member_api import MemberApi
from .board_api import BoardApi
from .mypage_api import MypageApi
from .admin_api import AdminApi

__all__ = ["AuthApi", "MemberApi", "BoardApi", "MypageApi", "AdminApi"]
