"""
cd [dir]: change metadata["cwd"].
"""
import os


def setup(bot):
    def cd(metadata, directory, options):
        if not directory:
            return None
        target = os.path.normpath(os.path.join(metadata["cwd"], directory))
        if not os.path.isdir(target):
            return bot.send(metadata, f"cd: {directory}: no such directory")
        metadata["cwd"] = target
        return target

    (bot.command("cd [dir]")
        .description("change the shell working directory")
        .action(cd))
