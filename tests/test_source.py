import pytest

from updatebot.source import Source


class TestSource:
    def test_defaults(self):
        source = Source('gitlab', 'gocardless/bump')
        assert source.branch is None
        assert source.api_endpoint == 'https://gitlab.com/api/v4'
        assert source.gitlab_url == 'https://gitlab.com'

    def test_self_hosted(self):
        source = Source('gitlab', 'group/project', branch='develop', api_endpoint='https://git.example.com/api/v4/')
        assert source.branch == 'develop'
        assert source.gitlab_url == 'https://git.example.com'

    def test_immutable(self):
        source = Source('gitlab', 'gocardless/bump')
        with pytest.raises(AttributeError):
            source.repo = 'other/repo'  # pylint: disable=assigning-non-slot

    def test_other_providers_rejected(self):
        with pytest.raises(ValueError):
            Source('github', 'gocardless/bump')
