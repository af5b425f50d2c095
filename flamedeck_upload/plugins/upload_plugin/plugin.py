"""
Upload plugin for pushing a trace file to the Flamedeck ingestion API.
"""
import click

from flamedeck_upload.errors import UploadError
from flamedeck_upload.options import UploadOptions
from flamedeck_upload.reporting import report_failure, report_success
from flamedeck_upload.uploader import upload_trace

API_KEY_ENVVAR = 'FLAMEDECK_API_KEY'
API_URL_ENVVAR = 'FLAMEDECK_API_URL'


def register(cli):
    """Register the 'upload' command to push a trace to Flamedeck."""
    @cli.command(name='upload')
    @click.argument('file_path', required=False, type=click.Path(dir_okay=False))
    @click.option(
        '--api-key', '-k', envvar=API_KEY_ENVVAR, default=None,
        help=f'Flamedeck API key (can also use {API_KEY_ENVVAR} env var)'
    )
    @click.option(
        '--file-name', '-n', default=None,
        help='File name to store the trace under (required when reading from stdin)'
    )
    @click.option(
        '--scenario', '-s', required=True,
        help='Scenario description'
    )
    @click.option('--commit', '-c', 'commit_sha', default=None, help='Git commit SHA')
    @click.option('--branch', '-b', default=None, help='Git branch name')
    @click.option('--notes', default=None, help='Notes for the trace')
    @click.option('--folder-id', default=None, help='UUID of the target folder')
    @click.option(
        '--metadata', default=None,
        help='Extra metadata as a JSON string'
    )
    @click.option(
        '--public', is_flag=True, default=False,
        help='Make the trace publicly viewable'
    )
    @click.option(
        '--api-url', '--supabase-url', 'api_url', envvar=API_URL_ENVVAR, default=None,
        help='Override the API functions base URL'
    )
    def upload(file_path, api_key, file_name, scenario, commit_sha, branch,
               notes, folder_id, metadata, public, api_url):
        """Upload FILE_PATH (or stdin when omitted) to Flamedeck."""
        if not api_key:
            click.echo(
                f'Error: API Key is required. Provide via --api-key flag or '
                f'{API_KEY_ENVVAR} environment variable.',
                err=True
            )
            raise SystemExit(1)

        options = UploadOptions(
            api_key=api_key,
            scenario=scenario,
            file_path=file_path,
            file_name=file_name,
            commit_sha=commit_sha,
            branch=branch,
            notes=notes,
            folder_id=folder_id,
            metadata=metadata,
            public=public,
            api_url=api_url,
        )
        try:
            result = upload_trace(
                options,
                stdin=click.get_binary_stream('stdin'),
                report=click.echo,
            )
        except UploadError as e:
            report_failure(e)
            raise SystemExit(1)
        report_success(result)

    return upload
