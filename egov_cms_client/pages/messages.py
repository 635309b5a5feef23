from __future__ import annotations

CONNECTION_FAILED = "Failed to connect to the server."
LOGIN_REQUIRED = "Login required."
ADMIN_PERMISSION_REQUIRED = "Admin permission required."

ENTER_ID = "Please enter an ID."
ID_AVAILABLE = "This ID is available."
ID_IN_USE = "This ID is already in use."
ID_CHECK_FAILED = "Failed to check ID availability."
CHECK_ID_FIRST = "Please check ID availability."
PASSWORD_MISMATCH = "Passwords do not match."
PASSWORD_TOO_SHORT = "Password must be at least 4 characters."
SIGNUP_DONE = "Sign-up complete. Redirecting to the login page."
SIGNUP_FAILED = "Sign-up failed."

LOGIN_SUCCESS = "Logged in."
LOGOUT_DONE = "Logged out."

ARTICLES_LOAD_FAILED = "Failed to load articles."
ARTICLE_LOAD_FAILED = "Failed to load the article."
CONFIRM_DELETE_ARTICLE = "Are you sure you want to delete this article?"
ARTICLE_DELETED = "The article has been deleted."
ARTICLE_DELETE_FAILED = "Failed to delete the article."
ENTER_TITLE = "Please enter a title."
ENTER_CONTENT = "Please enter content."
ARTICLE_CREATED = "The article has been posted."
ARTICLE_UPDATED = "The article has been updated."
ARTICLE_CREATE_FAILED = "Failed to post the article."
ARTICLE_UPDATE_FAILED = "Failed to update the article."
ATTACHMENT_READ_FAILED = "An attached file could not be read."

MYINFO_LOAD_FAILED = "Failed to load your information."
MYINFO_UPDATED = "Your information has been updated."
MYINFO_UPDATE_FAILED = "Failed to update your information."
CONFIRM_WITHDRAW = "Are you sure you want to delete your account? This cannot be undone."
WITHDRAW_DONE = "Your account has been deleted."
WITHDRAW_FAILED = "Failed to delete your account."

MEMBERS_LOAD_FAILED = "Failed to load the member list."
