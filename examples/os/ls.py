"""
ls [path]: list directory contents, relative to metadata["cwd"].
"""
import os
import stat


def _entry(name, path, options):
    info = os.lstat(os.path.join(path, name))
    if options["classify"]:
        if stat.S_ISDIR(info.st_mode):
            name += "/"
        elif stat.S_ISLNK(info.st_mode):
            name += "@"
    if options["l"]:
        name = f"{stat.filemode(info.st_mode)} {info.st_uid} {info.st_gid} {info.st_size}\t\t {name}"
    return name


def setup(bot):
    def ls(metadata, path, options):
        path = os.path.join(metadata["cwd"], path or ".")
        names = sorted(os.listdir(path))
        if not options["all"]:
            names = [name for name in names if not name.startswith(".")]
        return bot.send(metadata, "\n".join(_entry(name, path, options) for name in names))

    (bot.command("ls [path]")
        .description("list directory contents")
        .option("-F, --classify", "append indicator (one of /@) to entries")
        .option("-a, --all", "do not ignore entries starting with .")
        .option("-l", "use a long listing format")
        .action(ls))
