import json

from django.http import JsonResponse


def json_body(request):
    """Decode a JSON object request body; None when it isn't one"""
    try:
        data = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def invalid_json_response():
    return JsonResponse({'error': 'Invalid JSON'}, status=400)


def form_errors_response(form, status=400):
    errors = {
        field: [error['message'] for error in field_errors]
        for field, field_errors in form.errors.get_json_data().items()
    }
    return JsonResponse({'errors': errors}, status=status)
