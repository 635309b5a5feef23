from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

ToastType = Literal["success", "error", "warning", "info"]
TOAST_TYPES: tuple[str, ...] = ("success", "error", "warning", "info")


def is_success(code: Any) -> bool:
    """The backend reports success as either ``200`` or ``"200"``."""
    return _code_equals(code, 200)


def is_forbidden(code: Any) -> bool:
    return _code_equals(code, 403)


def _code_equals(code: Any, expected: int) -> bool:
    if isinstance(code, bool):
        return False
    if isinstance(code, int):
        return code == expected
    if isinstance(code, str):
        return code.strip() == str(expected)
    return False


@dataclass(frozen=True)
class ApiEnvelope:
    result_code: str | int
    result_message: str
    result: Any
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @staticmethod
    def from_json(payload: Any) -> "ApiEnvelope":
        if not isinstance(payload, dict):
            return ApiEnvelope(result_code="", result_message="", result=payload)

        code = payload.get("resultCode", "")
        if not isinstance(code, (str, int)) or isinstance(code, bool):
            code = str(code) if code is not None else ""

        return ApiEnvelope(
            result_code=code,
            result_message=str(payload.get("resultMessage") or ""),
            result=payload.get("result"),
            raw=payload,
        )

    @property
    def ok(self) -> bool:
        return is_success(self.result_code)

    @property
    def forbidden(self) -> bool:
        return is_forbidden(self.result_code)

    def result_dict(self) -> dict[str, Any]:
        return self.result if isinstance(self.result, dict) else {}

    def message_or(self, fallback: str) -> str:
        return self.result_message or fallback


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str | None = None
    user_se: str | None = None
    uniq_id: str | None = None
    group_nm: str | None = None

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "User":
        if not isinstance(data, dict):
            raise ValueError("User record must be an object")
        user_id = data.get("id")
        if user_id is None or str(user_id).strip() == "":
            raise ValueError("User record is missing 'id'")
        return User(
            id=str(user_id),
            name=str(data.get("name") or ""),
            email=_optional_str(data.get("email")),
            user_se=_optional_str(data.get("userSe")),
            uniq_id=_optional_str(data.get("uniqId")),
            group_nm=_optional_str(data.get("groupNm")),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.email is not None:
            data["email"] = self.email
        if self.user_se is not None:
            data["userSe"] = self.user_se
        if self.uniq_id is not None:
            data["uniqId"] = self.uniq_id
        if self.group_nm is not None:
            data["groupNm"] = self.group_nm
        return data

    @property
    def is_admin(self) -> bool:
        # Display hint only; the backend decides admin access.
        return self.user_se == "ADM" or self.group_nm == "ROLE_ADMIN"


@dataclass(frozen=True)
class Toast:
    id: str
    type: ToastType
    message: str
    duration: int = 3000


@dataclass(frozen=True)
class Modal:
    id: str
    title: str | None = None
    content: Any = None
    on_confirm: Callable[[], None] | None = None
    on_cancel: Callable[[], None] | None = None


@dataclass(frozen=True)
class CodeItem:
    code: str
    code_nm: str

    @staticmethod
    def list_from(items: Any) -> list["CodeItem"]:
        if not isinstance(items, list):
            return []
        return [
            CodeItem(code=str(item.get("code", "")), code_nm=str(item.get("codeNm", "")))
            for item in items
            if isinstance(item, dict)
        ]


@dataclass(frozen=True)
class PaginationInfo:
    current_page_no: int = 1
    total_record_count: int = 0
    total_page_count: int = 1

    @staticmethod
    def from_dict(data: Any) -> "PaginationInfo":
        if not isinstance(data, dict):
            return PaginationInfo()
        return PaginationInfo(
            current_page_no=_to_int(data.get("currentPageNo"), 1),
            total_record_count=_to_int(data.get("totalRecordCount"), 0),
            total_page_count=_to_int(data.get("totalPageCount"), 0) or 1,
        )


@dataclass(frozen=True)
class BoardMaster:
    bbs_id: str
    bbs_nm: str
    bbs_ty_code: str = ""
    file_atch_posbl_at: str = ""
    posbl_atch_file_number: int = 0
    posbl_atch_file_size: int | None = None

    @staticmethod
    def from_dict(data: Any) -> "BoardMaster | None":
        if not isinstance(data, dict):
            return None
        size = data.get("posblAtchFileSize")
        return BoardMaster(
            bbs_id=str(data.get("bbsId") or ""),
            bbs_nm=str(data.get("bbsNm") or ""),
            bbs_ty_code=str(data.get("bbsTyCode") or ""),
            file_atch_posbl_at=str(data.get("fileAtchPosblAt") or ""),
            posbl_atch_file_number=_to_int(data.get("posblAtchFileNumber"), 0),
            posbl_atch_file_size=_to_int(size, 0) if size is not None else None,
        )

    @property
    def allows_attachments(self) -> bool:
        return self.file_atch_posbl_at == "Y"


@dataclass(frozen=True)
class BoardArticle:
    ntt_id: int
    bbs_id: str
    ntt_no: int
    ntt_sj: str
    ntt_cn: str
    frst_register_id: str
    frst_register_pnttm: str
    inqire_co: int = 0
    frst_register_nm: str | None = None
    ntcr_nm: str | None = None
    atch_file_id: str | None = None
    reply_lc: int = 0

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "BoardArticle":
        return BoardArticle(
            ntt_id=_to_int(data.get("nttId"), 0),
            bbs_id=str(data.get("bbsId") or ""),
            ntt_no=_to_int(data.get("nttNo"), 0),
            ntt_sj=str(data.get("nttSj") or ""),
            ntt_cn=str(data.get("nttCn") or ""),
            frst_register_id=str(data.get("frstRegisterId") or ""),
            frst_register_pnttm=str(data.get("frstRegisterPnttm") or ""),
            inqire_co=_to_int(data.get("inqireCo"), 0),
            frst_register_nm=_optional_str(data.get("frstRegisterNm")),
            ntcr_nm=_optional_str(data.get("ntcrNm")),
            atch_file_id=_optional_str(data.get("atchFileId")),
            reply_lc=_to_int(data.get("replyLc"), 0),
        )

    @property
    def author_name(self) -> str:
        return self.frst_register_nm or self.ntcr_nm or "-"


@dataclass(frozen=True)
class Member:
    uniq_id: str
    mber_id: str
    mber_nm: str
    mber_email_adres: str = ""
    mber_sttus: str = ""
    sbscrb_de: str = ""

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Member":
        return Member(
            uniq_id=str(data.get("uniqId") or ""),
            mber_id=str(data.get("mberId") or ""),
            mber_nm=str(data.get("mberNm") or ""),
            mber_email_adres=str(data.get("mberEmailAdres") or ""),
            mber_sttus=str(data.get("mberSttus") or ""),
            sbscrb_de=str(data.get("sbscrbDe") or ""),
        )


SIGNUP_FIELDS: tuple[str, ...] = (
    "mberId",
    "mberNm",
    "password",
    "passwordHint",
    "passwordCnsr",
    "mberEmailAdres",
    "sexdstnCode",
    "moblphonNo",
)


MY_INFO_FIELDS: tuple[str, ...] = (
    "uniqId",
    "mberId",
    "mberNm",
    "mberEmailAdres",
    "sexdstnCode",
    "moblphonNo",
    "zip",
    "adres",
    "detailAdres",
    "passwordHint",
    "passwordCnsr",
)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _to_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
