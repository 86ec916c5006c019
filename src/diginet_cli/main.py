"""
DIGINET DNS CLI Main Entry Point

Command-line interface for QuickServiceBox DNS record management.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from diginet_dns import DNSAPIClient, __version__
from diginet_dns.exceptions import DNSAPIError, DNSAPITransportError
from diginet_dns.models import DNSRecord, OperationRequest
from diginet_dns.xml_builder import API_ENDPOINT
from diginet_cli.config import CLIConfig, create_sample_config, resolve_credentials
from diginet_cli.output import OutputFormatter, print_error

VERSION_BANNER = f"DIGINET DNS API Client v{__version__}"


# Global state for the CLI session
class CLIState:
    config: Optional[CLIConfig] = None
    formatter: Optional[OutputFormatter] = None


state = CLIState()


def credential_options(f):
    """Add --username and --passwordB64 to a command."""
    f = click.option(
        "--passwordB64",
        "password_b64",
        help="API password, base64 encoded (or use DIGINET_PASSWORD_B64 env)",
    )(f)
    f = click.option("--username", help="API username (or use DIGINET_USERNAME env)")(f)
    return f


def record_options(prefix: str = "", label: str = ""):
    """
    Add the six record field options.

    With a prefix the options are camel-cased to match the API field names,
    e.g. --oldDomain, --newTTL.
    """
    def opt(name: str) -> str:
        if not prefix:
            return f"--{name.lower()}"
        return f"--{prefix}{name}"

    def param(name: str) -> str:
        return f"{prefix}_{name.lower()}" if prefix else name.lower()

    def decorator(f):
        options = [
            click.option(opt("Domain"), param("Domain"), required=True, help=f"{label}Domain name"),
            click.option(opt("Host"), param("Host"), required=True, help=f"{label}Hostname"),
            click.option(
                opt("Type"), param("Type"), required=True,
                help=f"{label}Record type (A, AAAA, CNAME, MX, TXT, etc.)",
            ),
            click.option(opt("Data"), param("Data"), required=True, help=f"{label}Record data"),
            click.option(
                opt("TTL"), param("TTL"),
                type=int, default=0, show_default=True, help=f"{label}TTL in seconds",
            ),
            click.option(
                opt("Priority"), param("Priority"),
                type=int, default=0, show_default=True,
                help=f"{label}Priority (0 for non-MX records)",
            ),
        ]
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--profile", "-p", default="default", help="Config profile to use")
@click.option("--endpoint", help=f"DNS API URL (default: {API_ENDPOINT})")
@click.option("--timeout", type=int, help="Request timeout in seconds (default: 30)")
@click.option("--no-verify", is_flag=True, help="Disable server certificate verification")
@click.option("--format", "-f", type=click.Choice(["json", "text", "xml"]), default="json", help="Output format")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, "--version", "-v", message=VERSION_BANNER)
@click.pass_context
def cli(ctx, config, profile, endpoint, timeout, no_verify, format, quiet, debug):
    """
    DIGINET DNS API Client - QuickServiceBox DNS Management

    Add, update, delete, and list DNS records. Results are printed as a
    single line of JSON unless another --format is chosen.

    \b
    Configuration:
      Use a config file at ~/.diginet/config.yaml or specify options on command line.
      Run 'diginet-dns config init' to create a sample config file.

    \b
    Examples:
      diginet-dns list --username user --passwordB64 cGFzcw== --domain example.com
      diginet-dns add --username user --passwordB64 cGFzcw== --domain example.com \\
          --host www --type A --data 192.0.2.10 --ttl 3600
      diginet-dns -f text update --oldDomain example.com ... --newDomain example.com ...
    """
    # Setup logging
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    # Setup formatter
    state.formatter = OutputFormatter(format=format, quiet=quiet)

    # Load config
    if config:
        state.config = CLIConfig.from_file(Path(config), profile)
    else:
        state.config = CLIConfig.find_and_load(profile)

    # CLI options override config file
    api = state.config.api if state.config else None
    final_endpoint = endpoint or (api.endpoint if api else API_ENDPOINT)
    if timeout is not None:
        final_timeout = timeout
    else:
        final_timeout = api.timeout if api else 30
    final_verify = not no_verify and (api.verify if api else True)

    # Store in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["endpoint"] = final_endpoint
    ctx.obj["timeout"] = final_timeout
    ctx.obj["verify"] = final_verify


def get_credentials(username: Optional[str], password_b64: Optional[str]) -> tuple:
    """
    Resolve credentials or fail with a usage error.

    Raises:
        click.UsageError: If username or password is missing everywhere
    """
    username, password_b64 = resolve_credentials(username, password_b64, state.config)
    if not username:
        raise click.UsageError("Missing option '--username'.")
    if not password_b64:
        raise click.UsageError("Missing option '--passwordB64'.")
    return username, password_b64


def get_client(ctx) -> DNSAPIClient:
    """
    Create DNS API client from context settings.

    Args:
        ctx: Click context

    Returns:
        DNS API client
    """
    return DNSAPIClient(
        endpoint=ctx.obj.get("endpoint", API_ENDPOINT),
        timeout=ctx.obj.get("timeout", 30),
        verify=ctx.obj.get("verify", True),
    )


def run_request(ctx, request: OperationRequest) -> None:
    """Send request and print the decoded response."""
    client = get_client(ctx)
    try:
        result = client.execute(request)
    except DNSAPITransportError as e:
        state.formatter.error(f"Request failed: {e}")
        sys.exit(1)
    finally:
        client.close()

    state.formatter.output(result)


# =============================================================================
# Record Commands
# =============================================================================

@cli.command()
@credential_options
@record_options()
@click.pass_context
def add(ctx, username, password_b64, domain, host, type, data, ttl, priority):
    """Add a new DNS record."""
    username, password_b64 = get_credentials(username, password_b64)
    record = DNSRecord(
        domain=domain,
        host=host,
        record_type=type,
        data=data,
        ttl=ttl,
        priority=priority,
    )
    run_request(ctx, OperationRequest.add(username, password_b64, record))


@cli.command()
@credential_options
@record_options()
@click.pass_context
def delete(ctx, username, password_b64, domain, host, type, data, ttl, priority):
    """Delete an existing DNS record."""
    username, password_b64 = get_credentials(username, password_b64)
    record = DNSRecord(
        domain=domain,
        host=host,
        record_type=type,
        data=data,
        ttl=ttl,
        priority=priority,
    )
    run_request(ctx, OperationRequest.delete(username, password_b64, record))


@cli.command()
@credential_options
@record_options("old", "Current ")
@record_options("new", "New ")
@click.pass_context
def update(
    ctx, username, password_b64,
    old_domain, old_host, old_type, old_data, old_ttl, old_priority,
    new_domain, new_host, new_type, new_data, new_ttl, new_priority,
):
    """
    Update an existing DNS record.

    Specify both the current (--old*) and the new (--new*) values.
    """
    username, password_b64 = get_credentials(username, password_b64)
    old_record = DNSRecord(
        domain=old_domain,
        host=old_host,
        record_type=old_type,
        data=old_data,
        ttl=old_ttl,
        priority=old_priority,
    )
    new_record = DNSRecord(
        domain=new_domain,
        host=new_host,
        record_type=new_type,
        data=new_data,
        ttl=new_ttl,
        priority=new_priority,
    )
    run_request(ctx, OperationRequest.update(username, password_b64, old_record, new_record))


@cli.command("list")
@credential_options
@click.option("--domain", required=True, help="Domain name to list records for")
@click.pass_context
def list_records(ctx, username, password_b64, domain):
    """List DNS records for a domain."""
    username, password_b64 = get_credentials(username, password_b64)
    run_request(ctx, OperationRequest.list_records(username, password_b64, domain))


@cli.command()
def version():
    """Show version information."""
    click.echo(VERSION_BANNER)


# =============================================================================
# Config Commands
# =============================================================================

@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option("--path", "-p", type=click.Path(), default="~/.diginet/config.yaml", help="Config file path")
def config_init(path):
    """Create sample configuration file."""
    path = Path(path).expanduser()

    # Create parent directory
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.write_text(create_sample_config())

    state.formatter.success(f"Created config file: {path}")
    state.formatter.info("Edit the file to configure your DNS API settings.")


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    username, password_b64 = resolve_credentials(None, None, state.config)
    info = {
        "Profile": state.config.profile if state.config else "(no config file)",
        "Endpoint": ctx.obj.get("endpoint"),
        "Timeout": ctx.obj.get("timeout"),
        "Verify Server": "Yes" if ctx.obj.get("verify") else "No",
        "Username": username or "(not set)",
        "Password": "(set)" if password_b64 else "(not set)",
    }
    width = max(len(k) for k in info)
    for key, value in info.items():
        click.echo(f"{key.ljust(width + 2)}: {value}")


# =============================================================================
# Entry Point
# =============================================================================

def main():
    """Main entry point."""
    try:
        cli()
    except DNSAPIError as e:
        print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
