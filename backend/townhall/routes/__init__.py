"""
Townhall Backend — API Routes Package
=======================================

Route Inventory:
    - users.py:        /api/users, /api/users/search, /api/users/{id},
                       /api/users/{id}/discussions
    - discussions.py:  /api/discussions, /api/discussions/search,
                       /api/discussions/{id}, .../{id}/comments, .../{id}/likes
    - comments.py:     /api/comments, /api/comments/{id}
    - likes.py:        /api/likes, /api/likes/{id}
    - hashtags.py:     /api/hashtags, /api/hashtags/search, /api/hashtags/{id}
    - health.py:       /health

Routes are thin: extract parameters, call one service method, set the
X-Total-Count header on lists. POST, PUT and DELETE depend on require_user.
"""
