from unittest.mock import ANY, Mock

from updatebot.gitlab import Api, GET
from updatebot.user import User


INFO = {
    'id': 1234,
    'username': 'john_smith',
    'name': 'John Smith',
    'state': 'active',
}


class TestUser(object):
    def setup_method(self, _method):
        self.api = Mock(Api)

    def test_fetch_by_username_exists(self):
        api = self.api
        api.call = Mock(return_value=INFO)

        user = User.fetch_by_username('john_smith', api)

        api.call.assert_called_once_with(GET('/users', {'username': 'john_smith'}, ANY))
        assert user and user.id == 1234

    def test_fetch_by_username_missing(self):
        self.api.call = Mock(return_value=None)
        assert User.fetch_by_username('nobody', self.api) is None
