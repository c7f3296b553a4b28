from __future__ import annotations

from enum import Enum


class Currency(str, Enum):
    """Three-letter ISO currency code, in lowercase, as accepted by the API."""

    AED = "aed"
    AFN = "afn"
    ALL = "all"
    AMD = "amd"
    ANG = "ang"
    AOA = "aoa"
    ARS = "ars"
    AUD = "aud"
    AWG = "awg"
    AZN = "azn"
    BAM = "bam"
    BBD = "bbd"
    BDT = "bdt"
    BGN = "bgn"
    BIF = "bif"
    BMD = "bmd"
    BND = "bnd"
    BOB = "bob"
    BRL = "brl"
    BSD = "bsd"
    BWP = "bwp"
    BZD = "bzd"
    CAD = "cad"
    CDF = "cdf"
    CHF = "chf"
    CLP = "clp"
    CNY = "cny"
    COP = "cop"
    CRC = "crc"
    CVE = "cve"
    CZK = "czk"
    DJF = "djf"
    DKK = "dkk"
    DOP = "dop"
    DZD = "dzd"
    EEK = "eek"
    EGP = "egp"
    ETB = "etb"
    EUR = "eur"
    FJD = "fjd"
    FKP = "fkp"
    GBP = "gbp"
    GEL = "gel"
    GIP = "gip"
    GMD = "gmd"
    GNF = "gnf"
    GTQ = "gtq"
    GYD = "gyd"
    HKD = "hkd"
    HNL = "hnl"
    HRK = "hrk"
    HTG = "htg"
    HUF = "huf"
    IDR = "idr"
    ILS = "ils"
    INR = "inr"
    ISK = "isk"
    JMD = "jmd"
    JPY = "jpy"
    KES = "kes"
    KGS = "kgs"
    KHR = "khr"
    KMF = "kmf"
    KRW = "krw"
    KYD = "kyd"
    KZT = "kzt"
    LAK = "lak"
    LBP = "lbp"
    LKR = "lkr"
    LRD = "lrd"
    LSL = "lsl"
    LTL = "ltl"
    LVL = "lvl"
    MAD = "mad"
    MDL = "mdl"
    MGA = "mga"
    MKD = "mkd"
    MNT = "mnt"
    MOP = "mop"
    MRO = "mro"
    MUR = "mur"
    MVR = "mvr"
    MWK = "mwk"
    MXN = "mxn"
    MYR = "myr"
    MZN = "mzn"
    NAD = "nad"
    NGN = "ngn"
    NIO = "nio"
    NOK = "nok"
    NPR = "npr"
    NZD = "nzd"
    PAB = "pab"
    PEN = "pen"
    PGK = "pgk"
    PHP = "php"
    PKR = "pkr"
    PLN = "pln"
    PYG = "pyg"
    QAR = "qar"
    RON = "ron"
    RSD = "rsd"
    RUB = "rub"
    RWF = "rwf"
    SAR = "sar"
    SBD = "sbd"
    SCR = "scr"
    SEK = "sek"
    SGD = "sgd"
    SHP = "shp"
    SLL = "sll"
    SOS = "sos"
    SRD = "srd"
    STD = "std"
    SVC = "svc"
    SZL = "szl"
    THB = "thb"
    TJS = "tjs"
    TOP = "top"
    TRY = "try"
    TTD = "ttd"
    TWD = "twd"
    TZS = "tzs"
    UAH = "uah"
    UGX = "ugx"
    USD = "usd"
    UYU = "uyu"
    UZS = "uzs"
    VEF = "vef"
    VND = "vnd"
    VUV = "vuv"
    WST = "wst"
    XAF = "xaf"
    XCD = "xcd"
    XOF = "xof"
    XPF = "xpf"
    YER = "yer"
    ZAR = "zar"
    ZMW = "zmw"


class CheckoutSessionLocale(str, Enum):
    """IETF language tag Checkout is displayed in; ``auto`` uses the browser's locale."""

    AUTO = "auto"
    BG = "bg"
    CS = "cs"
    DA = "da"
    DE = "de"
    EL = "el"
    EN = "en"
    EN_GB = "en-GB"
    ES = "es"
    ES_419 = "es-419"
    ET = "et"
    FI = "fi"
    FIL = "fil"
    FR = "fr"
    FR_CA = "fr-CA"
    HR = "hr"
    HU = "hu"
    ID = "id"
    IT = "it"
    JA = "ja"
    KO = "ko"
    LT = "lt"
    LV = "lv"
    MS = "ms"
    MT = "mt"
    NB = "nb"
    NL = "nl"
    PL = "pl"
    PT = "pt"
    PT_BR = "pt-BR"
    RO = "ro"
    RU = "ru"
    SK = "sk"
    SL = "sl"
    SV = "sv"
    TH = "th"
    TR = "tr"
    VI = "vi"
    ZH = "zh"
    ZH_HK = "zh-HK"
    ZH_TW = "zh-TW"


class CheckoutSessionMode(str, Enum):
    PAYMENT = "payment"
    SETUP = "setup"
    SUBSCRIPTION = "subscription"


class CheckoutSessionSubmitType(str, Enum):
    """Customizes the text of the submit button. Not allowed for subscription sessions."""

    AUTO = "auto"
    BOOK = "book"
    DONATE = "donate"
    PAY = "pay"


class CheckoutSessionBillingAddressCollection(str, Enum):
    AUTO = "auto"
    REQUIRED = "required"
