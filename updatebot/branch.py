from . import gitlab


GET, POST = gitlab.GET, gitlab.POST


class Branch(gitlab.Resource):

    @classmethod
    def probe(cls, project_id, branch, api):
        """Tri-state lookup of a branch; see `gitlab.Api.probe`."""
        probe = api.probe(GET(
            '/projects/{project_id}/repository/branches/{branch}'.format(
                project_id=gitlab.quote(project_id),
                branch=gitlab.quote(branch),
            ),
        ))
        if probe.present:
            return probe._replace(value=cls(api, probe.value))
        return probe

    @classmethod
    def create(cls, api, project_id, branch, ref):
        info = api.call(POST(
            '/projects/{project_id}/repository/branches'.format(project_id=gitlab.quote(project_id)),
            {'branch': branch, 'ref': ref},
        ))
        return cls(api, info)

    @property
    def name(self):
        return self.info['name']
