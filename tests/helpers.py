"""
Shared builders for syncjobs tests.
"""
from syncjobs.models import ArchiveJob, Config, MirrorJob, ServerProfile, Verbosity

PROFILE = ServerProfile(name="box", user="bob", host="box.example.com",
                        port=2222, private_key="/keys/id_box")


def make_config(archive_jobs=(), mirror_jobs=(), verbosity=Verbosity.SILENT,
                progress=True, servers=None) -> Config:
    return Config(
        servers=servers or {"box": PROFILE},
        archive_jobs=list(archive_jobs),
        mirror_jobs=list(mirror_jobs),
        verbosity=verbosity,
        progress=progress,
    )


def archive_job(**kw) -> ArchiveJob:
    base = dict(server="box", filename="home", source="/home/bob", dest="remote:/backups")
    base.update(kw)
    return ArchiveJob(**base)


def mirror_job(**kw) -> MirrorJob:
    base = dict(server="box", source="/srv/data", dest="remote:/mirror/data")
    base.update(kw)
    return MirrorJob(**base)
