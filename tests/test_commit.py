from unittest.mock import Mock

from updatebot.gitlab import Api, GET, POST, PUT
from updatebot.commit import Commit


INFO = {
  "id": "6104942438c14ec7bd21c6cd5bd995272b3faff6",
  "short_id": "6104942438c",
  "title": "Sanitize for network graph",
  "author_name": "randx",
  "author_email": "dmitriy.zaporozhets@gmail.com",
  "committer_name": "Dmitriy",
  "committer_email": "dmitriy.zaporozhets@gmail.com",
  "created_at": "2012-09-20T09:06:12+03:00",
  "message": "Sanitize for network graph",
  "committed_date": "2012-09-20T09:06:12+03:00",
  "authored_date": "2012-09-20T09:06:12+03:00",
  "parent_ids": [
    "ae1d9fb46aa2b07ee9836d49862ec4e2c46fbbba"
  ],
  "status": "running"
}

ACTIONS = [{'action': 'update', 'file_path': 'Gemfile', 'content': 'gem "business"', 'encoding': 'text'}]


class TestCommit(object):
    def setup_method(self, _method):
        self.api = Mock(Api)

    def test_on_branch(self):
        self.api.call = Mock(return_value=[INFO, dict(INFO, id='older')])
        commits = Commit.on_branch('gocardless/bump', 'foo/bar', self.api)
        self.api.call.assert_called_once_with(GET(
            '/projects/gocardless%2Fbump/repository/commits',
            {'ref_name': 'foo/bar'},
        ))
        assert [commit.id for commit in commits] == [INFO['id'], 'older']

    def test_create(self):
        self.api.call = Mock(return_value=INFO)
        commit = Commit.create(self.api, 'gocardless/bump', 'update-branch', 'Commit msg', ACTIONS)
        self.api.call.assert_called_once_with(POST(
            '/projects/gocardless%2Fbump/repository/commits',
            {'branch': 'update-branch', 'commit_message': 'Commit msg', 'actions': ACTIONS},
        ))
        assert commit.info == INFO

    def test_create_with_author(self):
        Commit.create(
            self.api, 'gocardless/bump', 'update-branch', 'Commit msg', ACTIONS,
            author={'name': 'Update Bot', 'email': 'bot@example.com'},
        )
        self.api.call.assert_called_once_with(POST(
            '/projects/gocardless%2Fbump/repository/commits',
            {
                'branch': 'update-branch',
                'commit_message': 'Commit msg',
                'actions': ACTIONS,
                'author_name': 'Update Bot',
                'author_email': 'bot@example.com',
            },
        ))

    def test_update_submodule(self):
        Commit.update_submodule(
            self.api, 'gocardless/bump', 'vendor/manifesto',
            branch='update-branch', sha='sha1', message='Commit msg',
        )
        self.api.call.assert_called_once_with(PUT(
            '/projects/gocardless%2Fbump/repository/submodules/vendor%2Fmanifesto',
            {'branch': 'update-branch', 'commit_sha': 'sha1', 'commit_message': 'Commit msg'},
        ))

    def test_properties(self):
        commit = Commit(api=self.api, info=INFO)
        assert commit.id == "6104942438c14ec7bd21c6cd5bd995272b3faff6"
        assert commit.message == "Sanitize for network graph"
