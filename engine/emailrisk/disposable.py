# engine/emailrisk/disposable.py
# Bundled disposable provider list; extend at runtime through tables.load_tables
# or tables.fetch_disposable_domains.
DISPOSABLE_PROVIDERS = frozenset({
    "10minutemail.com", "guerrillamail.com", "mailinator.com", "tempmail.org",
    "temp-mail.org", "yopmail.com", "throwaway.email", "getnada.com",
    "maildrop.cc", "33mail.com", "trashmail.com", "dispostable.com",
    "spamgourmet.com", "sharklasers.com", "guerrillamailblock.com",
    "pokemail.net", "spam4.me", "bccto.me", "chacuo.net", "cookmail.info",
    "email60.com", "emailias.com", "hide.biz.st", "mytrashmail.com",
    "shieldedmail.com", "spamavert.com", "tempinbox.com", "tempmailaddress.com",
    "tempymail.com", "thankyou2010.com", "trbvm.com", "wegwerfmail.de",
    "zehnminutenmail.de", "mohmal.com", "minuteinbox.com", "armyspy.com",
    "cuvox.de", "dayrep.com", "einrot.com", "fleckens.hu", "gustr.com",
    "jourrapide.com", "rhyta.com", "superrito.com", "teleworm.us",
})


def is_disposable(domain: str, providers=None) -> bool:
    if not domain:
        return False
    if providers is None:
        providers = DISPOSABLE_PROVIDERS
    return domain.lower() in providers
