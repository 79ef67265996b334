from . import gitlab


GET = gitlab.GET


class User(gitlab.Resource):

    @classmethod
    def fetch_by_username(cls, username, api):
        """None when no user has that username."""
        info = api.call(GET(
            '/users',
            {'username': username},
            gitlab.from_singleton_list(),
        ))
        if info is None:
            return None
        return cls(api, info)
