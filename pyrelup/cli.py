"""CLI interface for the GitHub release asset uploader."""

import logging
from typing import Any, Optional

import click

from .api import GitHubClient
from .config import config
from .exceptions import ReleaseAPIError
from .inputs import parse_bool, parse_int, parse_multiline, parse_repo
from .models import ReleaseTarget
from .output import OutputFormatter, write_action_output
from .release import EventContext, resolve_release_id

logger = logging.getLogger(__name__)


def _split_lines(values: tuple[str, ...]) -> list[str]:
    """Flatten arguments that may each hold a multi-line list."""
    items: list[str] = []
    for value in values:
        items.extend(parse_multiline(value))
    return items


def require_client(ctx: Any, out: OutputFormatter) -> GitHubClient:
    """Create a client from the global token option or the config.

    Exits with status 1 when no token is available.
    """
    token = ctx.obj.get("token") or config.token
    if not token:
        out.error(
            "GitHub token not configured. "
            "Set GITHUB_TOKEN, pass --token or run 'pyrelup init'."
        )
        ctx.exit(1)
    return GitHubClient(token=token)


def resolve_target(
    client: GitHubClient,
    repo: Optional[str],
    release_id: Optional[str],
    tag: Optional[str],
) -> ReleaseTarget:
    """Build the release target from CLI options and the Actions context."""
    owner, repo_name = parse_repo(repo, config.repository)
    explicit_id = parse_int(release_id, "release_id", minimum=1)

    event = None
    if explicit_id is None and not tag and config.event_path is not None:
        event = EventContext.from_file(config.event_path)

    resolved_id = resolve_release_id(
        client,
        owner,
        repo_name,
        release_id=explicit_id,
        tag=tag or None,
        event=event,
    )
    return ReleaseTarget(owner=owner, repo=repo_name, release_id=resolved_id)


def release_options(func: Any) -> Any:
    """Options shared by every command that targets a release."""
    func = click.option(
        "--tag", help="Tag of the release (used when --release-id is not given)"
    )(func)
    func = click.option(
        "--release-id",
        help="Numeric release ID (defaults to the triggering release event)",
    )(func)
    func = click.option(
        "--repo",
        "-r",
        help="Repository as owner/repo (default: GITHUB_REPOSITORY)",
    )(func)
    return func


@click.group()
@click.option(
    "--token", "-t", envvar="GITHUB_TOKEN", help="GitHub token with repo access"
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pyrelup")
@click.pass_context
def main(
    ctx: Any,
    token: Optional[str],
    quiet: bool,
    json: bool,
    verbose: bool,
) -> None:
    """PyRelUp - Synchronize local files with GitHub release assets."""
    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pyrelup").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.option(
    "--token",
    "-t",
    prompt="Enter your GitHub token",
    hide_input=True,
    help="GitHub token",
)
@click.pass_context
def init(ctx: Any, token: str) -> None:
    """Store a GitHub token in ~/.config/pyrelup/config."""
    out: OutputFormatter = ctx.obj["out"]

    try:
        out.info("Validating token...")
        client = GitHubClient(token=token)
        try:
            user_info = client.get_authenticated_user()
            login = user_info.get("login") if isinstance(user_info, dict) else None
            out.success(f"✓ Token is valid (user: {login or 'unknown'})")
        except ReleaseAPIError as e:
            out.error(f"Token validation failed: {e}")
            if not click.confirm("Save token anyway?", default=False):
                out.warning("Configuration cancelled.")
                ctx.exit(1)
        finally:
            client.close()

        config.save_token(token)
        out.print_summary(
            "Initialization Complete",
            [
                ("Status", "✓ Configuration saved successfully"),
                ("Config file", str(config.get_config_path())),
            ],
        )
    except (ReleaseAPIError, OSError) as e:
        out.error(f"Initialization failed: {e}")
        ctx.exit(1)


@main.command()
@click.argument("files", nargs=-1)
@release_options
@click.option(
    "--delete",
    "-d",
    "delete_masks",
    multiple=True,
    help="Wildcard mask of assets to delete before uploading (repeatable)",
)
@click.option(
    "--overwrite",
    envvar="INPUT_OVERWRITE",
    default="",
    help="Replace existing assets that have the same name: true/false "
    "(default: true)",
)
@click.pass_context
def upload(
    ctx: Any,
    files: tuple[str, ...],
    repo: Optional[str],
    release_id: Optional[str],
    tag: Optional[str],
    delete_masks: tuple[str, ...],
    overwrite: str,
) -> None:
    """Upload files to a release, replacing same-named assets.

    FILES: Paths or glob patterns (e.g. 'dist/*.whl')
    """
    from .sync import ReleaseSyncEngine, resolve_files

    out: OutputFormatter = ctx.obj["out"]
    client = require_client(ctx, out)

    try:
        replace_existing = parse_bool(overwrite, "overwrite", True)
        target = resolve_target(client, repo, release_id, tag)
        local_files = resolve_files(_split_lines(files))

        if not out.quiet:
            out.info(f"Release: {target}")
            out.info(f"Files: {len(local_files)}")
            out.print("")

        engine = ReleaseSyncEngine(client, out)
        results = engine.sync(
            target,
            local_files,
            delete_masks=_split_lines(delete_masks),
            overwrite=replace_existing,
        )
    except (ReleaseAPIError, OSError) as e:
        out.error(str(e))
        ctx.exit(1)
    finally:
        client.close()

    if config.github_output is not None:
        write_action_output(config.github_output, "assets", results.to_json())

    if out.json_output:
        out.output_json(results.to_list())
        return

    out.print_table(
        ["File", "ID", "URL"],
        [
            [f.asset_name, str(o.file_id), o.download_url]
            for f, o in zip(local_files, results)
        ],
        title="Uploaded Assets",
    )
    out.print_summary("Upload Complete", [("Uploaded", f"{len(results)} file(s)")])


@main.command(name="ls")
@release_options
@click.pass_context
def list_assets(
    ctx: Any,
    repo: Optional[str],
    release_id: Optional[str],
    tag: Optional[str],
) -> None:
    """List the assets attached to a release."""
    from .assets_manager import ReleaseAssetsManager

    out: OutputFormatter = ctx.obj["out"]
    client = require_client(ctx, out)

    try:
        target = resolve_target(client, repo, release_id, tag)
        assets = ReleaseAssetsManager(client).get_all(target)
    except ReleaseAPIError as e:
        out.error(str(e))
        ctx.exit(1)
    finally:
        client.close()

    if out.json_output:
        out.output_json([asset.to_dict() for asset in assets])
        return

    if not assets:
        out.warning(f"No assets found in release {target}")
        return

    out.print_table(
        ["ID", "Name", "Size", "Type"],
        [
            [str(a.id), a.name, a.size_formatted, a.content_type or ""]
            for a in assets
        ],
        title=f"Assets of {target}",
    )


@main.command()
@click.argument("masks", nargs=-1, required=True)
@release_options
@click.option(
    "--dry-run", is_flag=True, help="Show matching assets without deleting them"
)
@click.pass_context
def delete(
    ctx: Any,
    masks: tuple[str, ...],
    repo: Optional[str],
    release_id: Optional[str],
    tag: Optional[str],
    dry_run: bool,
) -> None:
    """Delete release assets matching wildcard masks.

    MASKS: Wildcard masks such as '*.zip' (case-insensitive)
    """
    from .assets_manager import ReleaseAssetsManager
    from .patterns import compile_patterns
    from .sync import DeletionPlanner, ReleaseOperations, ReleaseSyncEngine

    out: OutputFormatter = ctx.obj["out"]
    client = require_client(ctx, out)
    mask_list = _split_lines(masks)

    try:
        target = resolve_target(client, repo, release_id, tag)
        if dry_run:
            planner = DeletionPlanner(
                ReleaseAssetsManager(client),
                ReleaseOperations(client),
                compile_patterns(mask_list),
            )
            matched = planner.plan(target)
        else:
            matched = ReleaseSyncEngine(client, out).delete_matching(
                target, mask_list
            )
    except ReleaseAPIError as e:
        out.error(str(e))
        ctx.exit(1)
    finally:
        client.close()

    if out.json_output:
        out.output_json(
            {"dry_run": dry_run, "assets": [asset.to_dict() for asset in matched]}
        )
        return

    if dry_run:
        for asset in matched:
            out.print(f"Would delete: {asset.name} ({asset.id})")
    out.print_summary(
        "Delete Complete" if not dry_run else "Dry Run",
        [("Matched", f"{len(matched)} asset(s)")],
    )


if __name__ == "__main__":
    main()
