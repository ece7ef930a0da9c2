START = "@startuml"
END = "@enduml"


def _is_start(line: str) -> bool:
    return line.strip().lower().startswith(START)


def _is_end(line: str) -> bool:
    return line.strip().lower().startswith(END)


def has_markers(code: str) -> bool:
    lines = [l for l in code.splitlines() if l.strip()]
    if not lines:
        return False
    return _is_start(lines[0]) and _is_end(lines[-1])


def repair_plantuml(code: str) -> str:
    """
    Guarantee a single @startuml ... @enduml frame.
    Anything before the first @startuml or after the last @enduml is dropped;
    a missing marker is added.
    """
    lines = code.splitlines()

    starts = [i for i, l in enumerate(lines) if _is_start(l)]
    if starts:
        lines = lines[starts[0]:]
    else:
        lines = [START] + lines

    ends = [i for i, l in enumerate(lines) if _is_end(l)]
    if ends:
        lines = lines[:ends[-1] + 1]
    else:
        lines = lines + [END]

    return "\n".join(lines)


def error_diagram(message: str) -> str:
    return f'{START}\nrectangle "{message}" as Error\n{END}'
