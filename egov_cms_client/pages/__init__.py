from .admin import AdminPage
from .board import BOARDS, BoardDetailPage, BoardListPage, BoardWritePage
from .home import HomePage
from .mypage import MypagePage
from .signup import SignupPage

__all__ = [
    "AdminPage",
    "BOARDS",
    "BoardDetailPage",
    "BoardListPage",
    "BoardWritePage",
    "HomePage",
    "MypagePage",
    "SignupPage",
]
