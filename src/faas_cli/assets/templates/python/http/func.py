from parliament import Context


def main(context: Context):
    """Function template.

    The context parameter carries the Flask request object.
    """
    if context.request.method == "POST":
        return context.request.get_data(), 200
    return "OK", 200
