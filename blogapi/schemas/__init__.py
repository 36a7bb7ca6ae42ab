from .auth import UserLogin, UserResponse, TokenResponse, RefreshRequest
from .comments import CommentCreate
from .posts import PostCreate, PostUpdate, PostSummary, PostDetail

__all__ = [
    "UserLogin", "UserResponse", "TokenResponse", "RefreshRequest",
    "CommentCreate",
    "PostCreate", "PostUpdate", "PostSummary", "PostDetail",
]
