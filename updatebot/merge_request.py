from . import gitlab


GET, POST, PUT = gitlab.GET, gitlab.POST, gitlab.PUT


class MergeRequest(gitlab.Resource):
    """A merge request, addressed through the project path it was found under."""

    def __init__(self, api, info, project_path):
        super().__init__(api, info)
        self._project_path = project_path

    @classmethod
    def create(cls, api, project_path, params):
        merge_request_info = api.call(POST(
            '/projects/{project_path}/merge_requests'.format(project_path=gitlab.quote(project_path)),
            params,
        ))
        return cls(api, merge_request_info, project_path)

    @classmethod
    def search(cls, api, project_path, params):
        merge_requests = api.collect_all_pages(GET(
            '/projects/{project_path}/merge_requests'.format(project_path=gitlab.quote(project_path)),
            params,
        ))
        return [cls(api, merge_request, project_path) for merge_request in merge_requests]

    @property
    def project_path(self):
        return self._project_path

    @property
    def iid(self):
        return self.info['iid']

    @property
    def web_url(self):
        return self.info['web_url']

    def set_approvers(self, approver_ids, approver_group_ids=None):
        params = {'approvers': list(approver_ids or [])}
        if approver_group_ids:
            params['approver_groups'] = list(approver_group_ids)
        return self._api.call(PUT(
            '/projects/{project_path}/merge_requests/{iid}/approvers'.format(
                project_path=gitlab.quote(self.project_path),
                iid=self.iid,
            ),
            params,
        ))
