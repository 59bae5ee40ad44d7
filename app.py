import logging
import os
import re
from typing import Optional

from flask import Flask, Response, request
from flask_restful import Api, Resource

from store import InvalidInput, NotFound, UserPatch, UserStore

HOST = os.getenv("USERS_HOST", "0.0.0.0")
PORT = int(os.getenv("USERS_PORT", "4000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)

GUIDE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Users CRUD API Guide</title>
    <style>
        body {{ font-family: sans-serif; margin: 40px; background-color: #f7f9fc; color: #333; }}
        h1 {{ color: #1e40af; }}
        h3 {{ color: #4338ca; border-bottom: 2px solid #e0e7ff; padding-bottom: 5px; margin-top: 25px; }}
        code {{ background-color: #eee; padding: 2px 5px; border-radius: 4px; font-weight: bold; }}
        ul {{ list-style: none; padding-left: 0; }}
        li {{ margin-bottom: 10px; border-left: 4px solid #93c5fd; padding-left: 10px; }}
        .method-get {{ color: #16a34a; font-weight: bold; }}
        .method-post {{ color: #f97316; font-weight: bold; }}
        .method-put {{ color: #ca8a04; font-weight: bold; }}
        .method-delete {{ color: #dc2626; font-weight: bold; }}
    </style>
</head>
<body>
    <h1>Users CRUD API</h1>
    <p>This server manages users and runs on port {port}.</p>
    <p>Use curl, Postman or the browser (for GET) to call these endpoints:</p>

    <h3>1. READ</h3>
    <ul>
        <li><span class="method-get">GET</span> <code>/users</code>: list all users.</li>
        <li><span class="method-get">GET</span> <code>/users/:id</code>: one user by ID (e.g. <code>/users/1</code>).</li>
    </ul>

    <h3>2. CREATE</h3>
    <ul>
        <li><span class="method-post">POST</span> <code>/users</code>: add a user. JSON body: <code>{{"name": "New User", "email": "new@example.com"}}</code></li>
    </ul>

    <h3>3. UPDATE</h3>
    <ul>
        <li><span class="method-put">PUT</span> <code>/users/:id</code>: update a user. JSON body with the fields to change: <code>{{"name": "Updated Name"}}</code></li>
    </ul>

    <h3>4. DELETE</h3>
    <ul>
        <li><span class="method-delete">DELETE</span> <code>/users/:id</code>: delete a user by ID.</li>
    </ul>
</body>
</html>
"""


def _json_body():
    # 没有 body、不是 JSON 或者不是对象，一律当作 {}
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


ID_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_id(raw):
    # 按前缀数字取 id（"2abc" -> 2），只认 ASCII 数字；
    # 取不到就原样交给 store，匹配不到就是 404
    m = ID_PREFIX.match(raw)
    return int(m.group(1)) if m else raw


class UserList(Resource):
    def __init__(self, store: UserStore):
        self.store = store

    def get(self):
        return [u.to_dict() for u in self.store.list()]

    def post(self):
        body = _json_body()
        try:
            user = self.store.create(body.get("name"), body.get("email"))
        except InvalidInput as e:
            logger.warning("create rejected: %s", e.message)
            return {"message": e.message}, 400
        return user.to_dict(), 201


class User(Resource):
    def __init__(self, store: UserStore):
        self.store = store

    def get(self, user_id):
        try:
            return self.store.get(_parse_id(user_id)).to_dict()
        except NotFound as e:
            return _not_found(e)

    def put(self, user_id):
        patch = UserPatch.from_body(_json_body())
        try:
            return self.store.update(_parse_id(user_id), patch).to_dict()
        except NotFound as e:
            return _not_found(e)

    def delete(self, user_id):
        try:
            self.store.delete(_parse_id(user_id))
        except NotFound as e:
            return _not_found(e)
        return Response(status=204)


def _not_found(e: NotFound):
    logger.warning("%s %s: %s", request.method, request.path, e.message)
    return {"message": e.message}, 404


def create_app(store: Optional[UserStore] = None, port: int = PORT) -> Flask:
    """每个 app 持有一个 UserStore，不传就用种子数据新建一个"""
    if store is None:
        store = UserStore.seeded()

    flask_app = Flask(__name__)
    api = Api(flask_app)

    @flask_app.route("/")
    def guide():
        return GUIDE_HTML.format(port=port)

    api.add_resource(UserList, "/users", resource_class_kwargs={"store": store})
    api.add_resource(User, "/users/<user_id>", resource_class_kwargs={"store": store})
    return flask_app


# gunicorn 启动时用 app:app
app = create_app()

# 本地调试用
if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.info("CRUD server is running on: http://localhost:%s", PORT)
    logger.info("Use an API client to test the endpoints under /users")
    app.run(host=HOST, port=PORT)
