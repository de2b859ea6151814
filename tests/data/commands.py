from __future__ import annotations

from typing import Annotated, ClassVar


# cligen: serve "Starts an HTTP server"
class ServeCLIArgs:
    port: Annotated[int, 'cli:"port,p,default:8080"']
    env: Annotated[str, 'cli:"env,e,required,options:dev|staging|prod|local"']


# cligen: --command=build --help="Builds the application"
class BuildCLIArgs:
    registry: ClassVar[dict[str, str]] = {}

    output: Annotated[str, 'cli:"output,o,default:./dist"']
    verbose: Annotated[bool, 'cli:"verbose,v"']
    tags: Annotated[list[str], 'cli:"tags,t"']
    platform: Annotated[str, 'cli:"platform,required,options:linux|darwin|windows"']
    timeout: Annotated[float, 'cli:"timeout"']

    def describe(self) -> str:
        return f"build for {self.platform}"
