# userdata/cli.py
import argparse
import logging
import os
import socket
import sys

from userdata import __VERSION__


def check_port(host, port):
    """Checks if a port is available on the given host."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((host, port))
        return True
    except OSError:
        return False


def get_local_ip():
    """Tries to determine the local IP address of the machine for LAN access."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(('10.255.255.255', 1))
        ip = s.getsockname()[0]
    except OSError:
        ip = '127.0.0.1'
    finally:
        s.close()
    return ip


def display_qr_code(url):
    """Generates and prints a QR code for the given URL to the terminal."""
    import qrcode
    qr = qrcode.QRCode()
    qr.add_data(url)
    qr.make(fit=True)
    print("📱 Scan the QR code to open the admin panel on your local network:")
    qr.print_tty()
    print("-" * 40)


def configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser():
    parser = argparse.ArgumentParser(prog="userdata", description="Users Data - named tables of user records.")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__VERSION__}")
    sub = parser.add_subparsers(dest="command", help="Available commands", required=True)

    run_cmd = sub.add_parser("run", help="Serve the admin panel.")
    run_cmd.add_argument("--host", default=None, help="Host address to bind to (default: 127.0.0.1)")
    run_cmd.add_argument("--port", type=int, default=None, help="Port number to listen on (default: 8000)")
    run_cmd.add_argument("--qr", action="store_true", help="Display a QR code for the server's LAN address.")

    sub.add_parser("activate", help="Create the plugin's table if it does not exist.")

    uninstall_cmd = sub.add_parser("uninstall", help="Drop the plugin's table and all its data.")
    uninstall_cmd.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")
    return parser


def cli(argv=None):
    from userdata.config import Config

    parser = build_parser()
    args = parser.parse_args(argv)
    config = Config.from_env()
    configure_logging(config.LOG_LEVEL)

    if args.command == "run":
        host = args.host or config.HOST
        port = args.port or config.PORT
        if args.qr:
            try:
                import qrcode  # noqa: F401
            except ImportError:
                print("❌ Error: The 'qrcode' library is required for the --qr feature.")
                print("   Please install it by running: pip install \"userdata[qr]\"")
                return 1

        if not check_port(host, port):
            print(f"❌ Error: Port {port} is already in use. Please specify a different port using --port.")
            return 1
        if args.qr:
            display_qr_code(f"http://{get_local_ip()}:{port}/admin?page=new_data")

        from userdata import create_app
        from userdata.server import run
        try:
            run(create_app(config), host=host, port=port, log_level=config.LOG_LEVEL)
        except KeyboardInterrupt:
            print("\n🛑 Server stopped by user.")
        return 0

    from userdata.database import init_db
    init_db(config.DATABASE_URL)

    if args.command == "activate":
        from userdata.activator import Activator
        Activator.activate()
        print("✅ Plugin activated.")
    elif args.command == "uninstall":
        if not args.yes:
            confirm = input("⚠️  This drops every table and user. Continue? [y/N]: ").strip().lower()
            if confirm != "y":
                print("❌ Uninstall aborted.")
                return 1
        from userdata.uninstall import uninstall
        os.environ[config.UNINSTALL_GUARD] = "1"
        try:
            uninstall(config.UNINSTALL_GUARD)
        finally:
            del os.environ[config.UNINSTALL_GUARD]
        print("✅ Plugin uninstalled.")
    return 0


def main():
    sys.exit(cli())


if __name__ == "__main__":
    main()
