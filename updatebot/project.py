from . import gitlab


GET = gitlab.GET


class Project(gitlab.Resource):

    @classmethod
    def fetch_by_path(cls, project_path, api):
        info = api.call(GET('/projects/%s' % gitlab.quote(project_path)))
        return cls(api, info)

    @property
    def default_branch(self):
        return self.info['default_branch']
