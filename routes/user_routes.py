"""
User Routes — REST endpoints for the user directory.

Builds a UserRequest from Flask's request, hands it to the
UserController and turns the returned action into a Flask response.
Backend errors are translated to status codes by the handlers below.
"""
from flask import abort, jsonify, redirect, render_template, request
from core.users import (
    InMemoryUserStore,
    Redirect,
    Render,
    UserController,
    UserError,
    UserRequest,
    UserService,
)
from rate_limiter import limiter
import os

# Form fields added by browsers / CSRF helpers that never reach the backend
FRAMEWORK_FIELDS = ('_method', '_token', 'csrf_token')

SPOOFABLE_METHODS = ('PUT', 'PATCH', 'DELETE')

WRITE_LIMIT = "30 per minute"


def build_user_store(kind=None):
    """Pick the backend named by USER_STORE ('sql' or 'memory')"""
    kind = (kind or os.environ.get('USER_STORE', 'sql')).strip().lower()
    if kind == 'memory':
        print("ℹ️  Using in-memory user store (data is lost on restart)")
        return InMemoryUserStore()
    if kind != 'sql':
        raise ValueError(f'Unknown USER_STORE: {kind}')
    return UserService()


def wants_json():
    """True when the client sent JSON or prefers a JSON response"""
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(['text/html', 'application/json'])
    return best == 'application/json'


def submitted_fields():
    """Raw submitted mapping, from the JSON body or the form"""
    if not request.is_json:
        return request.form.to_dict()
    data = request.get_json(silent=True)
    if data is None:
        abort(400, description='Malformed JSON body')
    if not isinstance(data, dict):
        abort(400, description='JSON body must be an object')
    return data


def method_override():
    """The _method field, read from the same source as the payload"""
    value = submitted_fields().get('_method')
    return value.strip().upper() if isinstance(value, str) else ''


def request_payload():
    """Submitted fields with framework-only keys removed"""
    data = submitted_fields()
    return {key: value for key, value in data.items() if key not in FRAMEWORK_FIELDS}


def build_request(with_payload=False, method=None):
    """Snapshot the current Flask request as an explicit UserRequest"""
    return UserRequest(
        method=method or request.method,
        path=request.path,
        payload=request_payload() if with_payload else {},
        wants_json=wants_json(),
    )


def _serialize(value):
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


def to_response(action, user_request):
    """Interpret a controller action as a Flask response"""
    if isinstance(action, Redirect):
        return redirect(action.location, code=action.status_code)
    if isinstance(action, Render):
        if user_request.wants_json:
            return jsonify({key: _serialize(value) for key, value in action.bindings.items()})
        return render_template(action.template, **action.bindings)
    raise TypeError(f'Unsupported action: {action!r}')


def register_user_routes(app, users=None):
    """Register user directory routes with the Flask app.

    ``users`` is the UserInterface implementation to inject; when omitted
    one is built from the USER_STORE environment variable.
    """
    controller = UserController(users if users is not None else build_user_store())
    app.extensions['user_controller'] = controller

    @app.route('/users', methods=['GET'])
    def list_users():
        """List every user"""
        user_request = build_request()
        return to_response(controller.handle_list(user_request), user_request)

    @app.route('/users/create', methods=['GET'])
    def create_user_form():
        """Blank creation form"""
        user_request = build_request()
        return to_response(controller.handle_show_form(user_request), user_request)

    @app.route('/users', methods=['POST'])
    @limiter.limit(WRITE_LIMIT)
    def store_user():
        """Create a user from the submitted fields"""
        user_request = build_request(with_payload=True)
        return to_response(controller.handle_create(user_request), user_request)

    @app.route('/users/<int:user_id>', methods=['GET'])
    def show_user(user_id):
        """Show one user"""
        user_request = build_request()
        return to_response(controller.handle_show(user_request, user_id), user_request)

    @app.route('/users/<int:user_id>/edit', methods=['GET'])
    def edit_user_form(user_id):
        """Edit form populated with the current values"""
        user_request = build_request()
        return to_response(controller.handle_edit_form(user_request, user_id), user_request)

    @app.route('/users/<int:user_id>', methods=['PUT', 'PATCH'])
    @limiter.limit(WRITE_LIMIT)
    def update_user(user_id):
        """Apply submitted fields to an existing user"""
        user_request = build_request(with_payload=True)
        return to_response(controller.handle_update(user_request, user_id), user_request)

    @app.route('/users/<int:user_id>', methods=['DELETE'])
    @limiter.limit(WRITE_LIMIT)
    def destroy_user(user_id):
        """Delete a user"""
        user_request = build_request()
        return to_response(controller.handle_delete(user_request, user_id), user_request)

    @app.route('/users/<int:user_id>', methods=['POST'])
    @limiter.limit(WRITE_LIMIT)
    def spoofed_user_method(user_id):
        """Clients that can only POST tunnel PUT/PATCH/DELETE through a _method field"""
        method = method_override()
        if method not in SPOOFABLE_METHODS:
            abort(405)

        if method == 'DELETE':
            user_request = build_request(method=method)
            return to_response(controller.handle_delete(user_request, user_id), user_request)

        user_request = build_request(with_payload=True, method=method)
        return to_response(controller.handle_update(user_request, user_id), user_request)

    @app.errorhandler(UserError)
    def handle_user_error(error):
        """Translate backend failures into status codes"""
        status = error.status_code
        details = getattr(error, 'errors', None)
        if status >= 500:
            print(f"❌ User store error on {request.method} {request.path}: {error.message}")
        else:
            print(f"⚠️  {request.method} {request.path} -> {status}: {error.message}")

        if wants_json():
            body = {'error': error.message}
            if details:
                body['details'] = details
            return jsonify(body), status

        return render_template(
            'errors.html',
            status_code=status,
            message=error.message,
            details=details or [],
        ), status

    return controller
