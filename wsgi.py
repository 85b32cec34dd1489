from microin import create_app
from werkzeug.middleware.proxy_fix import ProxyFix

app = create_app()
app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_for=1, x_host=1, x_port=1, x_prefix=1)

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["PORT"])
