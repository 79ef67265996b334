from unittest.mock import Mock

from updatebot.gitlab import Api, GET, POST, PUT
from updatebot.merge_request import MergeRequest


INFO = {
    'id': 84,
    'iid': 5,
    'title': 'PR name',
    'description': 'PR msg',
    'project_id': 1234,
    'state': 'opened',
    'source_branch': 'dependabot/bundler/business-1.5.0',
    'target_branch': 'master',
    'web_url': 'https://gitlab.example.com/gocardless/bump/merge_requests/5',
}


# pylint: disable=attribute-defined-outside-init
class TestMergeRequest:

    def setup_method(self, _method):
        self.api = Mock(Api)
        self.merge_request = MergeRequest(api=self.api, info=INFO, project_path='gocardless/bump')

    def test_create(self):
        self.api.call = Mock(return_value=INFO)
        params = {'source_branch': 'b', 'target_branch': 'master', 'title': 't'}

        merge_request = MergeRequest.create(self.api, 'gocardless/bump', params)

        self.api.call.assert_called_once_with(POST('/projects/gocardless%2Fbump/merge_requests', params))
        assert merge_request.info == INFO
        assert merge_request.project_path == 'gocardless/bump'

    def test_search(self):
        self.api.collect_all_pages = Mock(return_value=[INFO, dict(INFO, iid=6)])
        params = {'source_branch': 'b', 'target_branch': 'master', 'state': 'all'}

        result = MergeRequest.search(self.api, 'gocardless/bump', params)

        self.api.collect_all_pages.assert_called_once_with(GET('/projects/gocardless%2Fbump/merge_requests', params))
        assert [mr.iid for mr in result] == [5, 6]
        assert {mr.project_path for mr in result} == {'gocardless/bump'}

    def test_properties(self):
        assert self.merge_request.id == 84
        assert self.merge_request.iid == 5
        assert self.merge_request.project_path == 'gocardless/bump'
        assert self.merge_request.web_url.endswith('/merge_requests/5')

    def test_set_approvers(self):
        self.merge_request.set_approvers([1394555])
        self.api.call.assert_called_once_with(PUT(
            '/projects/gocardless%2Fbump/merge_requests/5/approvers',
            {'approvers': [1394555]},
        ))

    def test_set_approvers_with_groups(self):
        self.merge_request.set_approvers([1, 2], [77])
        self.api.call.assert_called_once_with(PUT(
            '/projects/gocardless%2Fbump/merge_requests/5/approvers',
            {'approvers': [1, 2], 'approver_groups': [77]},
        ))
