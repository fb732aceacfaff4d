"""Console reporting for key generation."""

import click


class Reporter:
    """Output capability passed to the generate workflow.

    The base class is silent and declines every confirmation, which
    suits non-interactive callers.
    """

    def status(self, message: str) -> None:
        """Progress step of a running operation."""

    def report(self, message: str) -> None:
        """Plain informational output."""

    def success(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def confirm(self, message: str) -> bool:
        return False


class ClickReporter(Reporter):
    """Reporter that renders to the terminal with click."""

    def status(self, message: str) -> None:
        click.secho(f"  {message}", dim=True)

    def report(self, message: str) -> None:
        click.echo(message)

    def success(self, message: str) -> None:
        click.secho(f"✓ {message}", fg='green')

    def warn(self, message: str) -> None:
        click.secho(f"⚠️  {message}", fg='yellow')

    def error(self, message: str) -> None:
        click.secho(f"❌ {message}", fg='red', err=True)

    def confirm(self, message: str) -> bool:
        try:
            return click.confirm(message, default=False)
        except click.Abort:
            # no interactive stdin
            return False


def show_results(reporter: Reporter, result, options) -> None:
    """Summarise generated files, the public key and next steps.

    Args:
        reporter: Output target
        result: KeyGenerationResult from generate_keys()
        options: KeyGenerationOptions used for the run
    """
    rows = [('Private Key', result.private_key_path, 'PKCS#1 format for SSH clients')]
    if result.encrypted_key_path:
        rows.append(('Encrypted Private', result.encrypted_key_path,
                     'Password-protected PKCS#8 format'))
    rows.append(('Public Key', result.public_key_path, 'OpenSSH format for Azure DevOps'))
    if result.config_updated:
        rows.append(('SSH Config', result.config_path, 'SSH configuration for Azure DevOps'))

    reporter.report("")
    reporter.success("SSH key pair generated successfully!")
    if result.config_updated:
        reporter.success(f"SSH config updated with {options.host_alias} entry!")

    reporter.report("")
    width = max(len(label) for label, _, _ in rows)
    for label, path, description in rows:
        reporter.report(f"  {label:<{width}}  {path}  ({description})")

    if result.copied_to_clipboard:
        reporter.report("")
        reporter.success("📋 Public key copied to clipboard!")

    reporter.report("\n" + "=" * 60)
    if result.copied_to_clipboard:
        reporter.report("📋 Public key (already copied to clipboard):")
    else:
        reporter.report("📋 Public key (copy this to Azure DevOps):")
    reporter.report("=" * 60)
    reporter.report(result.key_material.public_key_openssh)
    reporter.report("=" * 60 + "\n")

    paste_hint = "(already in clipboard)" if result.copied_to_clipboard else "content above"
    steps = [
        "Go to Azure DevOps → User Settings → SSH Public Keys",
        f"Click 'Add' and paste the public key {paste_hint}",
    ]
    if result.config_updated:
        steps.append("SSH is now configured! Clone repos with: "
                     f"git clone git@{options.host_alias}:v3/org/project/repo")
    else:
        steps.append("Configure your SSH client to use the private key")
    steps.append(f"Test the connection: ssh -T {options.user}@{options.host_name}")

    reporter.report("Next steps:")
    for i, step in enumerate(steps, 1):
        reporter.report(f"  {i}. {step}")
