class HookCommandError(Exception):
    def __init__(self, command: str, return_code: int):
        self.command = command
        self.return_code = return_code
        super().__init__(f"Command {command!r} exited with status {return_code}")
