from schoolhub import create_app

# WSGI entry point for production servers (e.g., gunicorn, waitress)
app = create_app()

import socket
import sys


def check_port(port):
    """Check if a port is available"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    result = sock.connect_ex(('127.0.0.1', port))
    sock.close()
    return result != 0


def find_available_port(start_port=3000, max_port=3100):
    """Find an available port starting from start_port"""
    for port in range(start_port, max_port):
        if check_port(port):
            return port
    return None


def print_startup_info(port):
    print("Starting School Management App")
    print("=" * 50)
    print(f"Local URL:   http://localhost:{port}")
    print(f"Add school:  http://localhost:{port}/add-school")
    print(f"Schools:     http://localhost:{port}/schools")
    print(f"Images in:   {app.config['UPLOAD_FOLDER']}")
    print("=" * 50)
    print("Press Ctrl+C to stop the server")


def main():
    port = find_available_port()
    if not port:
        print("No available ports found in range 3000-3100")
        return False

    print_startup_info(port)
    app.run(host='0.0.0.0', port=port, debug=True, use_reloader=False)
    return True


if __name__ == '__main__':
    try:
        sys.exit(0 if main() else 1)
    except KeyboardInterrupt:
        print("\nSchool Management App stopped by user")
        sys.exit(0)
